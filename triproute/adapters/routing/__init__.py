from .osrm_routing_engine import OsrmRoutingEngine

__all__ = ["OsrmRoutingEngine"]
