# Application shell: CLI and process-level logging setup.
from .cli import run

__all__ = ["run"]
