from __future__ import annotations

from vestibule import Config
from vestibule.NamespaceGate import Files, MountsConfig
from vestibule.shared.gate import ConfigLoader, GateLogger

# Lifecycle logger
_log = GateLogger.get("Lifecycle")


async def attach_configured_mounts(files: Files, mounts_path: str | None = None) -> int:
    """
    Attach every mount listed in the mounts config file.

    A mount that fails to attach is logged and skipped.

    Returns:
        Number of mounts attached
    """
    mounts_path = mounts_path or Config.get("MOUNTS_CONFIG")
    config = ConfigLoader.load(mounts_path, MountsConfig, create_default=True)
    if config is None:
        _log.error(f"Mounts config {mounts_path} could not be loaded; nothing attached")
        return 0

    attached = 0
    for mount in config.mounts:
        success, message = await files.attach(mount.path, mount.name)
        if success:
            attached += 1
        else:
            _log.error(f"Mount '{mount.name}' skipped: {message}")

    return attached


async def startup(files: Files):
    """Initialize subsystems on server startup."""
    GateLogger.set_level(Config.get("LOG_LEVEL", "INFO"))

    _, errors = Config.validate()
    for error in errors:
        _log.warning(error)

    attached = await attach_configured_mounts(files)
    _log.info(f"Startup complete, {attached} mount(s) attached")


async def shutdown(files: Files):
    """Detach everything on server shutdown."""
    snapshot = await files.debug_snapshot()
    for name in snapshot:
        await files.detach(name)
    _log.info(f"Shutdown complete, {len(snapshot)} mount(s) detached")


__all__ = ["startup", "shutdown", "attach_configured_mounts"]
