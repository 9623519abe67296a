from database import sync_monitor


async def get_sync_status() -> dict:
    return sync_monitor.status()


async def trigger_sync() -> dict:
    started = sync_monitor.trigger()
    return {**sync_monitor.status(), "started": started}
