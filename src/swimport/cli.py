from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from swimport.config import DEFAULT_TIMEOUT, ENV_KEY, ENV_TIMEOUT, ENV_URL, ENV_USER, ShopwareSettings
from swimport.csvpipe.loader import iter_records, resolve_delimiter
from swimport.csvpipe.mapping import load_mapping
from swimport.csvpipe.transform import CustomerTransformer
from swimport.data.reference import load_country_map, load_defaults, load_fake_order
from swimport.errors import ConfigError
from swimport.shopware.client import ShopwareApi
from swimport.sync.engine import CustomerImporter

app = typer.Typer(help="sw-customer-import CLI")

LOG_FORMAT = "[swimport] %(levelname)s %(message)s"


def _configure_logging(verbose: bool) -> None:
    log = logging.getLogger("swimport")
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
    log.setLevel(logging.DEBUG if verbose else logging.INFO)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Import customers into Shopware from delimited text files."""
    _configure_logging(verbose)


@app.command("import-customers")
def import_customers(
    source: Path = typer.Argument(..., help="The source csv file"),
    column_mapping: Path = typer.Argument(
        ...,
        metavar="COLUMN_MAPPING",
        help="The column mapping file, that defines which columns from the source csv file "
             "should be used for which shopware user field",
    ),
    sw_countries_json: Path = typer.Option(
        Path("data/s_core_countries.json"), "--sw-countries-json",
        help="Export of the target shops s_core_countries table in json format",
    ),
    sw_fake_order_json: Path = typer.Option(
        Path("data/fake-order.json"), "--sw-fake-order-json",
        help="Data for the fake order that will be created after customer creation in json format",
    ),
    group_key: Optional[str] = typer.Option(None, "--group-key", "-g", help="Target customer group in shopware"),
    defaults: Optional[Path] = typer.Option(
        None, "--defaults", help="YAML file with default customer fields (default: salutation mr)",
    ),
    api_url: str = typer.Option("", "--api-url", envvar=ENV_URL, help="Shop base URL, e.g. https://shop.example"),
    api_user: str = typer.Option("", "--api-user", envvar=ENV_USER, help="API user name"),
    api_key: str = typer.Option("", "--api-key", envvar=ENV_KEY, help="API key of that user"),
    timeout: float = typer.Option(DEFAULT_TIMEOUT, "--timeout", envvar=ENV_TIMEOUT, help="HTTP timeout (seconds)"),
):
    """Imports customers into shopware from a csv file."""
    log = logging.getLogger("swimport")

    # everything that can fail fatally happens before the first row
    try:
        mapping = load_mapping(column_mapping)
        country_map = load_country_map(sw_countries_json)
        fake_order = load_fake_order(sw_fake_order_json)
        default_fields = load_defaults(defaults) if defaults else None
        settings = ShopwareSettings(base_url=api_url, user=api_user, api_key=api_key, timeout=timeout)
        delimiter = resolve_delimiter(source)
    except ConfigError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    log.debug("mapping: %s", mapping)
    log.debug("api: %s", settings.summary())

    importer = CustomerImporter(
        client=ShopwareApi(settings),
        transformer=CustomerTransformer(mapping, country_map, default_fields),
        fake_order=fake_order,
        group_key=group_key,
    )
    report = importer.run(iter_records(source, delimiter))

    color = typer.colors.GREEN if not report.failed else typer.colors.YELLOW
    typer.secho(f"Done. {report.summary()}", fg=color)


if __name__ == "__main__":
    app()
