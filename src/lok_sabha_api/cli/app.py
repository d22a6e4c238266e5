"""``lok-sabha-api`` command line: run the server, manage the schema, import data, print metrics."""

import typer

from lok_sabha_api.cli.db_cmd import db_app
from lok_sabha_api.cli.import_cmd import import_app
from lok_sabha_api.cli.metrics_cmd import metrics_app
from lok_sabha_api.core.config import get_settings
from lok_sabha_api.core.logging import setup_logging

app = typer.Typer(name="lok-sabha-api", help="Lok Sabha results analytics CLI", no_args_is_help=True)
app.add_typer(db_app, name="db", help="Schema management commands")
app.add_typer(import_app, name="import", help="Load TCPD result files")
app.add_typer(metrics_app, name="metrics", help="Print metrics as JSON")


@app.callback()
def configure_logging() -> None:
    """Route every command's logs through the configured sinks."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_dir, json_logs=settings.log_json)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(5000, "--port", help="TCP port to listen on"),
    reload: bool = typer.Option(False, "--reload", help="Restart when source files change (development only)"),
) -> None:
    """Serve the read-only results API with uvicorn."""
    import uvicorn

    uvicorn.run("lok_sabha_api.main:create_app", factory=True, host=host, port=port, reload=reload)
