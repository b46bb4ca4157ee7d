"""PyTorch-backed store, handy when pair values feed straight into a model."""

from __future__ import annotations

from typing import Any

import torch

from .base import SlotRef, check_offset


class TensorStore:
    """
    Dense ``torch.Tensor`` store.

    Parameters
    ----------
    data:
        Pre-allocated tensor whose first dimension indexes slots.
    length:
        Number of filled slots; defaults to ``data.shape[0]``.
    dtype:
        Fixed element type. When omitted the buffer is promoted (e.g. from
        ``int64`` to ``float32``) to fit every incoming value; when given,
        values that cannot be cast to it raise ``TypeError``.
    """

    def __init__(
        self,
        data: torch.Tensor | None = None,
        *,
        length: int | None = None,
        capacity: int = 0,
        dtype: torch.dtype | None = None,
        device: torch.device | str = "cpu",
    ) -> None:
        self._data = data
        self._length = length if length is not None else (0 if data is None else data.shape[0])
        self._capacity = capacity
        self._dtype = dtype
        self._device = torch.device(device)

    @classmethod
    def new(
        cls,
        size: int,
        default: Any,
        *,
        dtype: torch.dtype | None = None,
        device: torch.device | str = "cpu",
    ) -> "TensorStore":
        sample = torch.as_tensor(default, dtype=dtype, device=device)
        data = sample.expand(size, *sample.shape).clone()
        return cls(data, length=size, dtype=dtype, device=device)

    @classmethod
    def with_capacity(
        cls,
        capacity: int,
        *,
        dtype: torch.dtype | None = None,
        device: torch.device | str = "cpu",
    ) -> "TensorStore":
        return cls(None, length=0, capacity=capacity, dtype=dtype, device=device)

    def _coerce(self, value: Any) -> torch.Tensor:
        sample = torch.as_tensor(value, device=self._device)
        if self._dtype is not None:
            if not torch.can_cast(sample.dtype, self._dtype):
                raise TypeError(
                    f"Cannot store a {sample.dtype} value in a store of dtype {self._dtype}"
                )
            return sample.to(self._dtype)
        if self._data is not None:
            target = torch.promote_types(self._data.dtype, sample.dtype)
            if target != self._data.dtype:
                self._data = self._data.to(target)
            return sample.to(target)
        return sample

    def push(self, value: Any) -> None:
        sample = self._coerce(value)
        if self._data is None:
            capacity = max(self._capacity, 1)
            self._data = torch.empty(
                (capacity, *sample.shape), dtype=sample.dtype, device=self._device
            )
        elif self._length == self._data.shape[0]:
            grown = torch.empty(
                (max(1, self._data.shape[0] * 2), *self._data.shape[1:]),
                dtype=self._data.dtype,
                device=self._device,
            )
            grown[: self._length] = self._data[: self._length]
            self._data = grown
        self._data[self._length] = sample
        self._length += 1

    def ref_at(self, offset: int) -> torch.Tensor:
        check_offset(offset, self._length)
        return self._data[offset]  # type: ignore[index]

    def mut_ref_at(self, offset: int) -> SlotRef:
        check_offset(offset, self._length)
        return SlotRef(self, offset)

    def set_at(self, offset: int, value: Any) -> None:
        check_offset(offset, self._length)
        self._data[offset] = self._coerce(value)  # type: ignore[index]

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        return f"TensorStore(length={self._length}, device={self._device})"

    def as_tensor(self) -> torch.Tensor:
        """The filled slots as a tensor (shares memory with the store)."""
        if self._data is None:
            return torch.empty((0,), dtype=self._dtype, device=self._device)
        return self._data[: self._length]
