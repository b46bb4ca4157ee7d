"""Visual summaries of pairwise storages."""

from .plots import save_pairwise_heatmap  # noqa: F401
