import logging
import os

import click
from rich.logging import RichHandler

from .constants import DEFAULT_CONFIG_FILE, DEFAULT_ENV_FILE, DEFAULT_OUTPUT_DIR
from .core import MySQLProvisioner
from .errors import ProvisionerError
from .services.config_loader import ConfigLoader


def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


@click.command()
@click.option(
    "--env",
    "environment",
    required=False,
    type=click.Choice(["local", "dev", "prod", "production"], case_sensitive=False),
    help="Target environment. Prompted for when omitted.",
)
@click.option(
    "--container",
    required=False,
    help="Docker container running the MySQL server. Overrides <ENV>_DOCKER_CONTAINER.",
)
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help=f"Path to a YAML configuration file. Defaults to {DEFAULT_CONFIG_FILE} if present.",
)
@click.option(
    "--env-file",
    required=False,
    type=click.Path(),
    help=f"Dotenv file with <ENV>_MYSQL_HOST, <ENV>_ADMIN_USER, ... (default: {DEFAULT_ENV_FILE}).",
)
@click.option(
    "--output-dir",
    required=False,
    type=click.Path(),
    help=f"Directory for credential files (default: {DEFAULT_OUTPUT_DIR}).",
)
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Path to log file")
def main(environment, container, config, env_file, output_dir, verbose, log_file):
    """Create a MySQL database and user, and save the credentials locally."""
    logger = logging.getLogger("mysqlprovisioner")

    try:
        config_loader = ConfigLoader()
        resolved_config = config
        if resolved_config is None:
            default_config_path = os.path.join(os.getcwd(), DEFAULT_CONFIG_FILE)
            if os.path.exists(default_config_path):
                resolved_config = default_config_path

        config_values = config_loader.load(resolved_config)
    except ProvisionerError as exc:
        raise click.ClickException(str(exc)) from exc

    environment = _resolve_option(environment, config_values, "environment")
    container = _resolve_option(container, config_values, "container")
    env_file = _resolve_option(env_file, config_values, "env_file", default=DEFAULT_ENV_FILE)
    output_dir = _resolve_option(output_dir, config_values, "output_dir", default=DEFAULT_OUTPUT_DIR)
    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)

    try:
        provisioner = MySQLProvisioner(
            environment=environment,
            container=container,
            env_file=env_file,
            output_dir=output_dir,
        )
    except ProvisionerError as exc:
        raise click.ClickException(str(exc)) from exc

    raise SystemExit(provisioner.run())


if __name__ == "__main__":
    main()
