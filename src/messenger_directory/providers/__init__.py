from .app import AdaptersProvider, GatewaysProvider

__all__ = ["AdaptersProvider", "GatewaysProvider"]
