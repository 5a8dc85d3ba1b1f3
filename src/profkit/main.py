import typer
from profkit.commands import config, auth
from profkit.logging import setup_logging, get_logger

app = typer.Typer(
    help="[bold blue]profkit[/bold blue] - profile configuration and token management",
    rich_markup_mode="rich",
)

app.add_typer(config.app, name="config")
app.add_typer(auth.app, name="auth")


@app.callback(invoke_without_command=True)
def callback(ctx: typer.Context):
    """
    [bold blue]profkit[/bold blue] - profile configuration and token management

    Build or convert config documents and manage session tokens.
    """
    if not ctx.invoked_subcommand:
        print("Welcome to profkit. To proceed type profkit --help")


def main():
    setup_logging()
    logger = get_logger("profkit.main")
    logger.debug("profkit CLI started")

    try:
        app()
    except Exception as e:
        logger.error(f"Unhandled exception in main: {str(e)}")
        raise
    finally:
        logger.debug("profkit CLI finished")


if __name__ == "__main__":
    main()
