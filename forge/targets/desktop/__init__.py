"""Desktop shell targets (Tauri, Electron)."""

from .lib import ElectronAssembler, TauriAssembler, toml_string

__all__ = [
    "TauriAssembler",
    "ElectronAssembler",
    "toml_string",
]
