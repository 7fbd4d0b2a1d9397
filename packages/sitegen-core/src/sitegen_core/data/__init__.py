from .loader import load_config, load_yaml_list, load_yaml_typed
from .shcd import filter_by_device_type, load_shcd, parse_shcd

__all__ = [
    "filter_by_device_type",
    "load_config",
    "load_shcd",
    "load_yaml_list",
    "load_yaml_typed",
    "parse_shcd",
]
