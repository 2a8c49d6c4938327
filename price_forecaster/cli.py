"""
Retail Price Forecaster — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Parse the history file and validate options.
  4. Run the engine.
  5. Echo an ASCII report (and optionally export with ``--output``).

Install and run::

    pip install -e .
    price-forecaster --help
    price-forecaster validate-config
    price-forecaster forecast-prices data/phone.csv --days 14
    price-forecaster recommend data/phone.csv --category electronics
    price-forecaster festivals --year 2026 --category fashion
    price-forecaster score-deal --price 899 --average 1000 --minimum 880
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="price-forecaster",
    help="Retail price and demand forecaster with buy-or-wait recommendations.",
    add_completion=False,
)

_DEFAULT_CATEGORY = "electronics"


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from price_forecaster.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from price_forecaster.utils.logging import configure_logging
    configure_logging(config.logging)


def _parse_as_of_or_exit(as_of: Optional[str]) -> Optional[date]:
    from price_forecaster.utils.time_utils import parse_date

    if as_of is None:
        return None
    try:
        return parse_date(as_of)
    except ValueError:
        typer.echo(f"[ERROR] Invalid --as-of date: {as_of!r}. Use YYYY-MM-DD.", err=True)
        raise typer.Exit(code=1)


def _load_prices_or_exit(history: str):
    from price_forecaster.ingestion.history_file import parse_price_history

    try:
        return parse_price_history(Path(history))
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


def _load_demand_or_exit(history: str, category: Optional[str] = None):
    """Parse a demand file; with ``category`` keep its rows plus untagged rows."""
    from price_forecaster.ingestion.history_file import parse_demand_history

    try:
        points = parse_demand_history(Path(history))
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    if category is None:
        return points
    return [p for p in points if p.category is None or p.category == category]


def _maybe_export(data, output: Optional[str]) -> None:
    from price_forecaster.reporting.export import export_models

    if output is None:
        return
    written = export_models(data, Path(output))
    typer.echo(f"[OK] Wrote {written}")


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Forecast horizon:  {config.forecast.horizon_days} days")
    typer.echo(f"  EMA alpha:         {config.forecast.ema_alpha}")
    typer.echo(f"  Band z-score:      {config.forecast.band_z}")
    typer.echo(f"  Festival lookahead:{config.festivals.lookahead_days} days")
    typer.echo(
        f"  Inventory cover:   {config.inventory.lead_time_days} lead + "
        f"{config.inventory.safety_stock_days} safety days"
    )
    typer.echo(f"  Log level:         {config.logging.level}")
    typer.echo(f"  Debug mode:        {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))


@app.command("forecast-prices")
def forecast_prices(
    history: str = typer.Argument(..., help="Price history file (.csv or .json)."),
    days: Optional[int] = typer.Option(
        None, "--days", min=1, help="Forecast horizon (default: config forecast.horizon_days).",
    ),
    alpha: Optional[float] = typer.Option(
        None, "--alpha", min=0.0, max=1.0, help="EMA smoothing factor (default: config).",
    ),
    output: Optional[str] = typer.Option(None, "--output", help="Export to .json or .csv."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Forecast daily prices with a confidence band."""
    from price_forecaster.forecasting.price import predict_prices
    from price_forecaster.reporting.formatters import format_price_forecast_table

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    points = _load_prices_or_exit(history)
    predictions = predict_prices(
        points,
        days or config.forecast.horizon_days,
        alpha=config.forecast.ema_alpha if alpha is None else alpha,
        band_z=config.forecast.band_z,
    )

    typer.echo(f"Price forecast from {len(points)} observations:")
    typer.echo(format_price_forecast_table(predictions))
    _maybe_export(predictions, output)


@app.command("recommend")
def recommend(
    history: str = typer.Argument(..., help="Price history file (.csv or .json)."),
    category: str = typer.Option(_DEFAULT_CATEGORY, "--category", help="Product category."),
    as_of: Optional[str] = typer.Option(None, "--as-of", help="Reference date YYYY-MM-DD (default: today)."),
    days: Optional[int] = typer.Option(
        None, "--days", min=1, help="Forecast horizon used for the wait decision.",
    ),
    output: Optional[str] = typer.Option(None, "--output", help="Export to .json or .csv."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Recommend buy now, wait, or set an alert for one product."""
    from price_forecaster.forecasting.price import predict_prices
    from price_forecaster.recommendations.engine import generate_buy_recommendation
    from price_forecaster.reporting.formatters import format_recommendation

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    reference = _parse_as_of_or_exit(as_of)
    points = _load_prices_or_exit(history)
    predictions = predict_prices(
        points,
        days or config.forecast.horizon_days,
        alpha=config.forecast.ema_alpha,
        band_z=config.forecast.band_z,
    )
    rec = generate_buy_recommendation(
        points,
        predictions,
        category=category,
        as_of=reference,
        lookahead_days=config.festivals.lookahead_days,
    )

    typer.echo(format_recommendation(rec))
    _maybe_export(rec, output)


@app.command("score-deal")
def score_deal_cmd(
    price: float = typer.Option(..., "--price", help="Current price."),
    average: float = typer.Option(..., "--average", help="Historical average price."),
    minimum: float = typer.Option(..., "--minimum", help="Historical minimum price."),
    festival_active: bool = typer.Option(
        False, "--festival-active", help="A festival sale is running now.",
    ),
) -> None:
    """Score a single price on the 0-100 deal scale."""
    from price_forecaster.recommendations.deal_scorer import score_deal
    from price_forecaster.reporting.formatters import format_deal_score

    deal = score_deal(price, average, minimum, festival_active)
    typer.echo(format_deal_score(deal))


@app.command("festivals")
def festivals(
    year: Optional[int] = typer.Option(None, "--year", help="Catalog year (default: year of --as-of)."),
    category: Optional[str] = typer.Option(
        None, "--category", help="Only festivals relevant to this category; also shows the upcoming impact.",
    ),
    as_of: Optional[str] = typer.Option(None, "--as-of", help="Reference date YYYY-MM-DD (default: today)."),
    output: Optional[str] = typer.Option(None, "--output", help="Export to .json or .csv."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """List the festival calendar for a year."""
    from price_forecaster.reporting.formatters import (
        format_festival_impact,
        format_festival_table,
    )
    from price_forecaster.seasonality.calendar import (
        applies_to_category,
        festivals_for_year,
        upcoming_festival_impact,
    )
    from price_forecaster.utils.time_utils import resolve_as_of

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    reference = resolve_as_of(_parse_as_of_or_exit(as_of))
    catalog = festivals_for_year(year or reference.year)
    if category:
        catalog = [f for f in catalog if applies_to_category(f, category)]

    typer.echo(f"Festival calendar {year or reference.year} ({len(catalog)} festivals):")
    typer.echo(format_festival_table(catalog))

    if category:
        impact = upcoming_festival_impact(
            category, reference, config.festivals.lookahead_days,
        )
        typer.echo("")
        if impact is None:
            typer.echo(
                f"  No {category} festival within {config.festivals.lookahead_days} days "
                f"of {reference.isoformat()}."
            )
        else:
            typer.echo(f"  Next for {category}: {format_festival_impact(impact)}")
    _maybe_export(catalog, output)


@app.command("seasonality")
def seasonality(
    history: str = typer.Argument(..., help="Price history file (.csv or .json)."),
    category: Optional[str] = typer.Option(None, "--category", help="Attach only this category's festivals."),
    output: Optional[str] = typer.Option(None, "--output", help="Export to .json or .csv."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Show month-by-month price multipliers learned from history."""
    from price_forecaster.reporting.formatters import format_seasonal_patterns
    from price_forecaster.seasonality.patterns import detect_seasonal_pattern

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    points = _load_prices_or_exit(history)
    patterns = detect_seasonal_pattern(points, category=category)

    typer.echo(f"Seasonal patterns from {len(points)} observations:")
    typer.echo(format_seasonal_patterns(patterns))
    _maybe_export(patterns, output)


@app.command("forecast-demand")
def forecast_demand_cmd(
    history: str = typer.Argument(..., help="Demand history file (.csv or .json)."),
    category: str = typer.Option(_DEFAULT_CATEGORY, "--category", help="Product category."),
    days: Optional[int] = typer.Option(
        None, "--days", min=1, help="Forecast horizon (default: config forecast.horizon_days).",
    ),
    output: Optional[str] = typer.Option(None, "--output", help="Export to .json or .csv."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Forecast daily demand with the multiplier breakdown."""
    from price_forecaster.demand.forecaster import forecast_demand
    from price_forecaster.reporting.formatters import format_demand_forecast_table

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    points = _load_demand_or_exit(history, category)
    forecasts = forecast_demand(category, points, days or config.forecast.horizon_days)

    typer.echo(f"Demand forecast for {category} from {len(points)} observations:")
    typer.echo(format_demand_forecast_table(forecasts))
    _maybe_export(forecasts, output)


@app.command("inventory")
def inventory(
    history: str = typer.Argument(..., help="Demand history file (.csv or .json)."),
    category: str = typer.Option(_DEFAULT_CATEGORY, "--category", help="Product category."),
    lead_time: Optional[int] = typer.Option(None, "--lead-time", min=0, help="Supplier lead time in days."),
    safety_days: Optional[int] = typer.Option(None, "--safety-days", min=0, help="Safety stock in days."),
    output: Optional[str] = typer.Option(None, "--output", help="Export to .json or .csv."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Size stock and reorder point for one category."""
    from price_forecaster.demand.insights import calculate_optimal_inventory
    from price_forecaster.reporting.formatters import format_inventory_plan

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    points = _load_demand_or_exit(history, category)
    plan = calculate_optimal_inventory(
        category,
        points,
        lead_time_days=config.inventory.lead_time_days if lead_time is None else lead_time,
        safety_stock_days=(
            config.inventory.safety_stock_days if safety_days is None else safety_days
        ),
    )

    typer.echo(f"Inventory plan for {category}:")
    typer.echo(format_inventory_plan(plan))
    _maybe_export(plan, output)


@app.command("insights")
def insights(
    history: str = typer.Argument(..., help="Demand history file (.csv or .json)."),
    category: str = typer.Option(_DEFAULT_CATEGORY, "--category", help="Product category."),
    as_of: Optional[str] = typer.Option(None, "--as-of", help="Reference date YYYY-MM-DD (default: today)."),
    output: Optional[str] = typer.Option(None, "--output", help="Export to .json or .csv."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Summarise demand trend, volatility and upcoming events."""
    from price_forecaster.demand.insights import generate_demand_insights
    from price_forecaster.reporting.formatters import format_demand_insights

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    reference = _parse_as_of_or_exit(as_of)
    points = _load_demand_or_exit(history, category)
    result = generate_demand_insights(
        category, points, as_of=reference, lookahead_days=config.festivals.lookahead_days,
    )

    typer.echo(f"Demand insights for {category}:")
    typer.echo(format_demand_insights(result))
    _maybe_export(result, output)


@app.command("opportunities")
def opportunities(
    history: str = typer.Argument(..., help="Demand history file with a category column."),
    as_of: Optional[str] = typer.Option(None, "--as-of", help="Reference date YYYY-MM-DD (default: today)."),
    output: Optional[str] = typer.Option(None, "--output", help="Export to .json or .csv."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Rank every category in the file by projected 30-day demand growth."""
    from price_forecaster.demand.insights import identify_market_opportunities
    from price_forecaster.reporting.formatters import format_opportunities

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    reference = _parse_as_of_or_exit(as_of)
    points = _load_demand_or_exit(history)

    by_category: dict[str, list] = {}
    for p in points:
        if p.category:
            by_category.setdefault(p.category, []).append(p)
    if not by_category:
        typer.echo("[ERROR] No rows carry a category; add a 'category' column.", err=True)
        raise typer.Exit(code=1)

    ranked = identify_market_opportunities(
        sorted(by_category),
        by_category,
        as_of=reference,
        lookahead_days=config.festivals.lookahead_days,
    )

    typer.echo(f"Market opportunities across {len(by_category)} categories:")
    typer.echo(format_opportunities(ranked))
    _maybe_export(ranked, output)


if __name__ == "__main__":
    app()
