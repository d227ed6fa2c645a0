"""
Main CLI entry point for user-directory.

Provides commands for serving the API and issuing development tokens.
"""

import click

from user_directory import __version__
from user_directory.cli.base import (
    add_common_options, handle_cli_errors, load_cli_config,
    console, print_info, print_success, print_table
)
from user_directory.lib.security import TokenValidator


@click.group()
@click.version_option(version=__version__)
def main():
    """User directory service CLI."""
    pass


@main.command()
@click.option("--host", help="Interface to bind (overrides configuration)")
@click.option("--port", type=int, help="Port to listen on (overrides configuration)")
@add_common_options
@handle_cli_errors
def serve(host, port, config, env_file, verbose):
    """Start the user directory API server."""
    import uvicorn

    from user_directory.api.app import create_app

    settings = load_cli_config(config, env_file, verbose)
    host = host or settings.api.host
    port = port or settings.api.port

    print_info(f"Serving user directory on http://{host}:{port}")
    if settings.api.debug:
        print_info(f"API docs available at http://{host}:{port}/docs")

    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)


@main.command("issue-token")
@click.option("--subject", "-s", default="developer", show_default=True, help="Token subject claim")
@click.option("--minutes", "-m", type=int, help="Token lifetime in minutes")
@add_common_options
@handle_cli_errors
def issue_token(subject, minutes, config, env_file, verbose):
    """Print a development bearer token signed with the configured secret."""
    settings = load_cli_config(config, env_file, verbose)
    token = TokenValidator(settings.auth).issue_token(subject, lifetime_minutes=minutes)

    print_success(f"Token issued for '{subject}'")
    console.print(token, soft_wrap=True)


@main.command("show-config")
@add_common_options
@handle_cli_errors
def show_config(config, env_file, verbose):
    """Show the effective configuration (secret masked)."""
    settings = load_cli_config(config, env_file, verbose)

    rows = [
        ("auth.issuer", settings.auth.issuer),
        ("auth.audience", settings.auth.audience),
        ("auth.secret_key", "*" * 8),
        ("auth.algorithm", settings.auth.algorithm),
        ("auth.clock_skew_seconds", settings.auth.clock_skew_seconds),
        ("api.host", settings.api.host),
        ("api.port", settings.api.port),
        ("api.debug", settings.api.debug),
        ("api.log_level", settings.api.log_level),
        ("directory.seed_demo_users", settings.directory.seed_demo_users),
        ("log_dir", settings.log_dir or "-"),
    ]
    print_table(rows, ["Setting", "Value"], title="User Directory Configuration")


if __name__ == "__main__":
    main()
