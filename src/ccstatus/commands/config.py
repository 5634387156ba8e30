"""Config commands -- inspect the resolved configuration.

Provides the ``ccstatus config`` sub-command group. Settings are read-only
here; edit the JSON files or set ``CCSTATUS_*`` environment variables to
change them.
"""

from __future__ import annotations

import typer

from ccstatus.commands.common import get_settings
from ccstatus.output import get_output

config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the effective configuration after files, environment, and flags.

    Example::

        ccstatus config show
    """
    from ccstatus.config import get_config_dir

    out = get_output()
    out.info(f"Config directory: {get_config_dir()}")
    out.print_json(get_settings(ctx))


@config_app.command("path")
def config_path() -> None:
    """Show which config files are consulted."""
    from ccstatus.config import find_project_config, user_config_path

    out = get_output()
    user = user_config_path()
    project = find_project_config()
    out.print_table(
        ["Layer", "Path", "Exists"],
        [
            ["user", str(user), "yes" if user.is_file() else "no"],
            ["project", str(project) if project else "-", "yes" if project else "no"],
        ],
    )
