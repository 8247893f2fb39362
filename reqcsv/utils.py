import yaml

from reqcsv.prj_exception import SettingsError


def yaml_loader(config_file='config.yaml'):
    """
    Load a YAML file and return the contents.

    Parameters:
        config_file (str): String path to config file

    Returns:
        dict: The contents of the YAML file, or None when the file does not exist.
    """
    try:
        with open(config_file, 'r', encoding='utf-8') as file:
            return yaml.safe_load(file)
    except FileNotFoundError:
        return None


def load_config(config_file='config.yaml', required=False) -> dict:
    """
    Load the run configuration.

    A missing file yields an empty dict unless `required` is set, in which
    case it is an error, as is malformed YAML or a top level that is not a mapping.
    """
    try:
        config = yaml_loader(config_file)
    except yaml.YAMLError as e:
        raise SettingsError(f"Error loading config file {config_file}", e) from e
    except OSError as e:
        raise SettingsError(f"Error reading config file {config_file}", e) from e

    if config is None:
        if required:
            raise SettingsError(f"Config file not found or empty: {config_file}")
        return {}
    if not isinstance(config, dict):
        raise SettingsError(f"Config file {config_file} must contain a mapping, got {type(config).__name__}")
    return config
