from __future__ import annotations


class InstallAbort(RuntimeError):
    """Non-recoverable installer condition; halts the whole installation."""


class UnsupportedArchitecture(InstallAbort):
    def __init__(self, arch: str) -> None:
        super().__init__(f"Unsupported Architecture: {arch}")
        self.arch = arch


class BinaryNotFound(InstallAbort):
    def __init__(self, abi: str, path: str) -> None:
        super().__init__(f"Binary For {abi} Not Found In This Zip")
        self.abi = abi
        self.path = path


class ConfigError(InstallAbort):
    pass
