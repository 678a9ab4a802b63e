from vfsh.config.manager import ConfigManager, ShellConfig, get_config_manager

__all__ = ["ConfigManager", "ShellConfig", "get_config_manager"]
