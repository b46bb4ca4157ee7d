"""Plotting helpers for inspecting pairwise storages."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import matplotlib

# Force a non-interactive backend for headless environments (CI, servers, etc.).
matplotlib.use("Agg", force=True)
import matplotlib.pyplot as plt  # noqa: E402

from ..storage import PairwiseStorage  # noqa: E402


def save_pairwise_heatmap(
    storage: PairwiseStorage,
    *,
    output_path: Path | str,
    fill: Any = 0,
    title: str = "Pairwise Values",
    cmap: str = "viridis",
) -> Path:
    """
    Save the storage as a symmetric heatmap with one row/column per key.

    Parameters
    ----------
    storage:
        Storage holding scalar values.
    output_path:
        Target image path. Directories are created automatically.
    fill:
        Value drawn on the diagonal, where no pair exists.
    title, cmap:
        Chart title and matplotlib colormap name.
    """
    if len(storage) == 0:
        raise ValueError("Storage holds no pairs; nothing to plot.")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    matrix = storage.to_matrix(fill=fill).astype(float)
    labels = [str(key) for key in storage.keys()]

    size = max(4.0, 0.5 * len(labels) + 2.0)
    fig, ax = plt.subplots(figsize=(size, size))
    image = ax.imshow(matrix, cmap=cmap)
    ax.set_xticks(range(len(labels)))
    ax.set_yticks(range(len(labels)))
    ax.set_xticklabels(labels, rotation=45, ha="right")
    ax.set_yticklabels(labels)
    ax.set_title(title)
    fig.colorbar(image, ax=ax, fraction=0.046, pad=0.04)

    fig.tight_layout()
    fig.savefig(output_path, dpi=180)
    plt.close(fig)

    return output_path
