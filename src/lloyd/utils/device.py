"""
Torch device selection.

Runs stay on the CPU unless a device is asked for. A requested accelerator
that is not present degrades to the CPU with a warning instead of failing.
"""

from typing import Optional, Union
import torch
import warnings


def _mps_available() -> bool:
    backend = getattr(torch.backends, 'mps', None)
    return backend is not None and backend.is_available()


def get_default_device() -> torch.device:
    """Best device on this machine: CUDA, then MPS, then CPU."""
    if torch.cuda.is_available():
        return torch.device('cuda')
    if _mps_available():
        return torch.device('mps')
    return torch.device('cpu')


def parse_device(device: Optional[Union[str, torch.device]] = None) -> torch.device:
    """Resolve a device argument.

    Args:
        device: None or 'cpu' for the CPU, 'auto' for ``get_default_device()``,
            'cuda', 'cuda:N' or 'mps' for an accelerator, or a torch.device
            used as-is.

    Raises:
        ValueError: For an unrecognized device string
        TypeError: For anything that is neither a str nor a torch.device
    """
    if device is None:
        return torch.device('cpu')
    if isinstance(device, torch.device):
        return device
    if not isinstance(device, str):
        raise TypeError(f"Device must be str or torch.device, got {type(device)}")

    if device == 'auto':
        return get_default_device()
    if device == 'cpu':
        return torch.device('cpu')

    if device.startswith('cuda'):
        available = torch.cuda.is_available()
    elif device == 'mps':
        available = _mps_available()
    else:
        raise ValueError(f"Unknown device: {device}")

    if not available:
        warnings.warn(f"{device} is not available, falling back to CPU")
        return torch.device('cpu')
    return torch.device(device)
