"""
Compute device detection.

PyTorch is imported lazily; without it every query resolves to the CPU.
"""

from dataclasses import dataclass
from typing import Literal
import platform


@dataclass(frozen=True)
class DeviceInfo:
    """
    Description of a compute device.

    Attributes:
        device_type: 'cpu', 'cuda' or 'mps'
        device_index: Device ordinal (None for CPU)
        name: Human-readable device name
        memory_bytes: Total device memory in bytes, if known
    """
    device_type: Literal['cpu', 'cuda', 'mps']
    device_index: int | None
    name: str
    memory_bytes: int | None

    def __str__(self) -> str:
        if self.device_type == 'cpu':
            return f"CPU ({self.name})"
        mem_str = ""
        if self.memory_bytes is not None:
            mem_str = f", {self.memory_bytes / (1024**3):.1f}GB"
        return f"{self.device_type.upper()}:{self.device_index} ({self.name}{mem_str})"

    @property
    def is_gpu(self) -> bool:
        return self.device_type in ('cuda', 'mps')

    @property
    def torch_device(self) -> str:
        """Device string understood by torch ('cpu', 'cuda:0', 'mps')."""
        if self.device_type == 'cuda':
            return f"cuda:{self.device_index}"
        return self.device_type


def detect_gpu() -> DeviceInfo | None:
    """
    Best available GPU, CUDA before MPS, or None.
    """
    try:
        import torch
    except ImportError:
        return None

    if torch.cuda.is_available():
        idx = torch.cuda.current_device()
        props = torch.cuda.get_device_properties(idx)
        return DeviceInfo(
            device_type='cuda',
            device_index=idx,
            name=props.name,
            memory_bytes=props.total_memory,
        )

    if hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
        return DeviceInfo(
            device_type='mps',
            device_index=0,
            name='Apple Silicon GPU',
            memory_bytes=None,
        )

    return None


def get_cpu_info() -> DeviceInfo:
    processor = platform.processor() or platform.machine() or "Unknown CPU"
    return DeviceInfo(
        device_type='cpu',
        device_index=None,
        name=processor,
        memory_bytes=None,
    )


def select_device(prefer: Literal['cpu', 'gpu', 'auto'] = 'auto') -> DeviceInfo:
    """
    Select compute device based on preference and availability.

    Args:
        prefer: 'cpu' always uses the CPU, 'gpu' requires a GPU,
            'auto' uses a GPU when one is present.

    Raises:
        RuntimeError: If 'gpu' requested but no GPU available
    """
    if prefer == 'cpu':
        return get_cpu_info()

    gpu = detect_gpu()

    if prefer == 'gpu':
        if gpu is None:
            raise RuntimeError(
                "GPU requested but no GPU available. "
                "Install the 'gpu' extra (PyTorch with CUDA/MPS support)."
            )
        return gpu

    return gpu if gpu is not None else get_cpu_info()
