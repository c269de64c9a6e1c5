"""Init command implementation.

Writes a default config.toml that the operator can then edit.
"""

from pathlib import Path
from typing import Annotated

import typer

from xcleanup.core.config import default_config, save_config
from xcleanup.core.errors import ConfigurationError
from xcleanup.core.paths import get_config_path
from xcleanup.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Create a default configuration file.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def init_config(
    ctx: typer.Context,
    path: Annotated[
        Path | None,
        typer.Option(
            "--path",
            "-p",
            help="Where to write the config (default: ~/.config/xcleanup/config.toml).",
        ),
    ] = None,
    allowed: Annotated[
        list[str] | None,
        typer.Option(
            "--allowed",
            "-a",
            help="Allowed root path (repeatable, default: /tmp).",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing config file.",
        ),
    ] = False,
) -> None:
    """Create a configuration file with conservative defaults.

    Examples:
        xcleanup init
        xcleanup init --allowed /var/tmp --allowed /srv/cache
        xcleanup init --path ./config.toml --force
    """
    if ctx.invoked_subcommand is not None:
        return

    config_path = path or get_config_path()

    if config_path.exists() and not force:
        print_error(f"Config already exists: {config_path}")
        print_info("Use --force to overwrite.")
        raise typer.Exit(code=1)

    try:
        config = default_config(allowed)
        saved = save_config(config, config_path)
    except (ConfigurationError, ValueError) as e:
        print_error(f"Failed to create config: {e}")
        raise typer.Exit(code=1) from e

    print_success(f"Config written: {saved}")
    console.print(f"Allowed paths: {', '.join(config.paths.allowed_paths)}")
    print_info("Review the file, then run 'xcleanup run --dry-run'.")
