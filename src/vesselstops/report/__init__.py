from .geojson import GeoJsonReport, feature_collection, stop_event_feature, to_geodataframe

__all__ = ["GeoJsonReport", "feature_collection", "stop_event_feature", "to_geodataframe"]
