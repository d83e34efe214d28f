"""bizdash CLI: command-line interface for the navigation core.

Commands:
    catalog     Show the navigation catalog and how each area is gated
    classify    Classify one or more route paths
    access      Resolve an account's profile and show its lock table
    plans       Show the plan tiers offered by the upgrade prompt
    validate    Validate the catalog and accounts files
    dashboard   Launch the dashboard API server
"""

from __future__ import annotations

import asyncio
import json
import sys

import click

from bizdash import __version__
from bizdash.catalog.loader import CatalogError, NavCatalog, default_catalog, load_catalog
from bizdash.config import BizdashConfig, load_config
from bizdash.models import AccessSentinel, Classification
from bizdash.policy.classifier import classify, matching_rule, normalize_path
from bizdash.policy.resolver import AccessPolicyResolver, AccessSnapshot
from bizdash.store.base import ProfileLoadError
from bizdash.store.factory import build_store
from bizdash.store.memory import load_store_file
from bizdash.upgrade.plans import DEFAULT_PLANS


def _resolve_cfg() -> BizdashConfig:
    """Load config from bizdash.yaml (auto-discover, never error)."""
    try:
        return load_config()
    except Exception:
        return BizdashConfig()


def _or(explicit: str | None, cfg_val: str | None) -> str | None:
    """Return first non-None value: explicit CLI flag > config."""
    return explicit or cfg_val


def _load_catalog_or_exit(path: str | None) -> NavCatalog:
    try:
        return load_catalog(path) if path else default_catalog()
    except CatalogError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _gate_badge(classification: Classification) -> str:
    if classification == AccessSentinel.ALWAYS_UNLOCKED:
        return click.style("[open]", fg="green")
    if classification == AccessSentinel.ALWAYS_LOCKED:
        return click.style("[locked]", fg="red")
    return click.style(f"[{classification}]", fg="cyan")


def _lock_badge(locked: bool) -> str:
    if locked:
        return click.style("LOCKED", fg="red", bold=True)
    return click.style("OPEN  ", fg="green", bold=True)


# --- Root group ---


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """bizdash: feature-gated navigation for the business dashboard."""


# --- catalog command ---


@cli.command()
@click.option("--catalog", "catalog_file", default=None, help="Path to catalog YAML file")
@click.option("--json-output", is_flag=True, help="Output as JSON")
def catalog(catalog_file: str | None, json_output: bool) -> None:
    """Show the navigation catalog."""
    cfg = _resolve_cfg()
    cat = _load_catalog_or_exit(_or(catalog_file, cfg.catalog))

    if json_output:
        data = [
            {**node.model_dump(mode="json", exclude={"children"}),
             "depth": depth, "gate": str(classify(node.path))}
            for node, depth in cat.walk()
        ]
        click.echo(json.dumps(data, indent=2))
        return

    for node, depth in cat.walk():
        indent = "  " * depth
        label = f"{node.name}{'/' if node.is_branch else ''}"
        click.echo(
            f"{indent}{label:<{34 - len(indent)}} "
            f"{node.path:<28} "
            + _gate_badge(classify(node.path))
        )
    click.echo(f"\n{len(cat)} area(s) in catalog.")


# --- classify command ---


@cli.command("classify")
@click.argument("paths", nargs=-1, required=True)
@click.option("--json-output", is_flag=True, help="Output as JSON")
def classify_paths(paths: tuple[str, ...], json_output: bool) -> None:
    """Classify route paths against the ordered rule table."""
    results = []
    for raw in paths:
        rule = matching_rule(raw)
        results.append({
            "path": normalize_path(raw),
            "classification": str(classify(raw)),
            "rule": rule.name if rule is not None else None,
        })

    if json_output:
        click.echo(json.dumps(results, indent=2))
        return

    for r in results:
        click.echo(
            f"  {r['path']:<32} "
            + _gate_badge(classify(r["path"]))
            + f"  ({r['rule'] or 'no rule matched'})"
        )


# --- access command ---


@cli.command()
@click.argument("account")
@click.option("--accounts", default=None, help="Path to accounts YAML file")
@click.option("--catalog", "catalog_file", default=None, help="Path to catalog YAML file")
@click.option("--json-output", is_flag=True, help="Output as JSON")
def access(
    account: str,
    accounts: str | None,
    catalog_file: str | None,
    json_output: bool,
) -> None:
    """Resolve ACCOUNT's profile and show which areas it unlocks."""
    cfg = _resolve_cfg()
    cat = _load_catalog_or_exit(_or(catalog_file, cfg.catalog))
    try:
        store = build_store(cfg, accounts)
    except ProfileLoadError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    profile = asyncio.run(AccessPolicyResolver(store).resolve(account))
    snapshot = AccessSnapshot(profile)
    decisions = [snapshot.decide(node.path) for node in cat.nodes]

    if json_output:
        click.echo(json.dumps({
            "account_id": account,
            "profile": profile.model_dump(mode="json") if profile else None,
            "unlocked_features": sorted(str(f) for f in snapshot.unlocked_features()),
            "decisions": [d.model_dump(mode="json") for d in decisions],
        }, indent=2))
        return

    if profile is None:
        click.echo(
            click.style("No profile", fg="yellow", bold=True)
            + f"  for {account}: every gated area is locked."
        )
    else:
        status = profile.subscription_status or "n/a"
        live = "" if profile.is_live() else click.style("  (not live)", fg="red")
        click.echo(f"Account:  {account}")
        click.echo(f"Plan:     {profile.name} [{status}]{live}")
        click.echo(f"Org:      {profile.organization_id}")
    click.echo("")

    for node, decision in zip(cat.nodes, decisions, strict=True):
        click.echo(
            f"  {_lock_badge(decision.is_locked)}  {node.name:<20} "
            f"{decision.path:<16} " + _gate_badge(decision.feature)
        )
    unlocked = sum(1 for d in decisions if not d.is_locked)
    click.echo(f"\n{unlocked}/{len(decisions)} area(s) unlocked.")


# --- plans command ---


@cli.command()
@click.option("--json-output", is_flag=True, help="Output as JSON")
def plans(json_output: bool) -> None:
    """Show the plan tiers offered by the upgrade prompt."""
    if json_output:
        data = [p.model_dump(mode="json") for p in DEFAULT_PLANS]
        click.echo(json.dumps(data, indent=2))
        return

    for plan in DEFAULT_PLANS:
        badge = click.style("  popular", fg="yellow") if plan.popular else ""
        click.echo(click.style(plan.name, bold=True) + f"  {plan.display_price}{badge}")
        click.echo(f"  {plan.description}")
        for line in plan.highlights:
            click.echo(f"    - {line}")
        click.echo("")


# --- validate command ---


@cli.command()
@click.option("--catalog", "catalog_file", default=None, help="Path to catalog YAML file")
@click.option("--accounts", default=None, help="Path to accounts YAML file")
def validate(catalog_file: str | None, accounts: str | None) -> None:
    """Validate the catalog and accounts files."""
    cfg = _resolve_cfg()
    catalog_file = _or(catalog_file, cfg.catalog)
    accounts = _or(accounts, cfg.accounts)

    errors: list[str] = []
    ok_count = 0

    cat: NavCatalog | None = None
    try:
        cat = load_catalog(catalog_file) if catalog_file else default_catalog()
        click.echo(
            click.style("OK", fg="green")
            + f"  catalog: {len(cat)} area(s) loaded"
        )
        ok_count += 1
    except CatalogError as e:
        errors.append(f"catalog: {e}")
        click.echo(click.style("FAIL", fg="red") + f"  catalog: {e}")

    if cat is not None:
        unreachable = [
            p for p in cat.paths() if classify(p) == AccessSentinel.ALWAYS_LOCKED
        ]
        for path in unreachable:
            errors.append(f"classifier: {path}")
            click.echo(
                click.style("FAIL", fg="red")
                + f"  classifier: {path} matches no rule and can never be unlocked"
            )
        if not unreachable:
            click.echo(
                click.style("OK", fg="green")
                + "  classifier: every catalog path is reachable"
            )
            ok_count += 1

    if accounts:
        try:
            store = load_store_file(accounts)
            click.echo(
                click.style("OK", fg="green")
                + f"  accounts: {len(store.account_ids)} account(s) loaded"
            )
            ok_count += 1
        except ProfileLoadError as e:
            errors.append(f"accounts: {e}")
            click.echo(click.style("FAIL", fg="red") + f"  accounts: {e}")

    if errors:
        click.echo(f"\n{len(errors)} error(s) found.")
        sys.exit(1)
    click.echo(f"\nAll {ok_count} check(s) passed.")


# --- dashboard command ---


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=8420, type=int, help="Port number")
@click.option("--dev", is_flag=True, help="Enable CORS for frontend dev server")
@click.option("--catalog", "catalog_file", default=None, help="Path to catalog YAML file")
@click.option("--accounts", default=None, help="Path to accounts YAML file")
def dashboard(
    host: str,
    port: int,
    dev: bool,
    catalog_file: str | None,
    accounts: str | None,
) -> None:
    """Launch the dashboard API server."""
    cfg = _resolve_cfg()

    try:
        import uvicorn
    except ImportError:
        click.echo(
            "Dashboard requires extra dependencies. Install with:\n"
            "  pip install bizdash[dashboard]",
            err=True,
        )
        sys.exit(1)

    from dashboard.backend.app import create_app
    from dashboard.backend.config import DashboardConfig

    config = DashboardConfig.from_project(
        cfg,
        host=host,
        port=port,
        catalog_file=catalog_file,
        accounts_file=accounts,
        dev_mode=dev,
    )

    app = create_app(config)

    click.echo(f"bizdash Dashboard API: http://{host}:{port}")
    if dev:
        click.echo("  Dev mode: CORS enabled for http://localhost:5173")

    uvicorn.run(app, host=host, port=port, log_level=config.log_level.lower())
