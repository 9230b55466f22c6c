from .loader import DEFAULT_CONFIG_NAME, SyncConfig, TargetConfig, default_config, load_sync_config

__all__ = ["DEFAULT_CONFIG_NAME", "SyncConfig", "TargetConfig", "default_config", "load_sync_config"]
