"""CLI entry point for pagecloner."""

import json
import logging
import sys

import click

from .config import load_config
from .exceptions import ConfigError, PageClonerError
from .formatter import format_containers, format_documents, format_report, format_templates
from .models import GenerationRequest, OrganizationMode, TitleSpec
from .remote import get_store_client
from .service import PageClonerService
from .template_store import TemplateStore
from .titles import GENERATORS


def _service(ctx: click.Context) -> PageClonerService:
    """Build the service on first use (tests may pre-seed ctx.obj)."""
    obj = ctx.ensure_object(dict)
    if "service" not in obj:
        try:
            config = load_config(template_dir=obj.get("template_dir"), verbose=obj.get("verbose", False))
        except ConfigError as e:
            click.echo(f"Configuration error: {e}", err=True)
            sys.exit(2)
        obj["service"] = PageClonerService(
            get_store_client(config), TemplateStore(config.template_dir), config,
        )
    return obj["service"]


def _emit(data: dict, as_json: bool, render) -> None:
    if as_json:
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(render(data))


def _fail(e: PageClonerError) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(2)


@click.group()
@click.option(
    "--template-dir",
    type=click.Path(),
    default=None,
    help="Where captured templates are stored (default: PAGECLONER_TEMPLATE_DIR or ./.pagecloner/templates)",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output")
@click.pass_context
def main(ctx, template_dir, verbose):
    """Create many pages from one template page."""
    obj = ctx.ensure_object(dict)
    obj.setdefault("template_dir", template_dir)
    obj.setdefault("verbose", verbose)
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON result")
@click.pass_context
def containers(ctx, as_json):
    """List every space you can see."""
    try:
        result = _service(ctx).list_containers()
    except PageClonerError as e:
        _fail(e)
    _emit(result, as_json, lambda d: format_containers(d["containers"]))


@main.command()
@click.option("--max-documents", type=int, default=None, help="Stop after this many pages (default: 5000)")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON result")
@click.pass_context
def crawl(ctx, max_documents, as_json):
    """List pages across all spaces."""
    try:
        result = _service(ctx).crawl_all_documents(max_documents)
    except PageClonerError as e:
        _fail(e)
    _emit(result, as_json, lambda d: format_documents(d["documents"]))
    if result.get("error"):
        click.echo(f"Crawl stopped early: {result['error']}", err=True)
    if result["failedContainers"]:
        click.echo(f"Could not load spaces: {', '.join(result['failedContainers'])}", err=True)
    if result["truncated"]:
        click.echo(f"Stopped at {result['totalCount']} pages.", err=True)


@main.command("resolve-url")
@click.argument("url")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON result")
@click.pass_context
def resolve_url(ctx, url, as_json):
    """Show the page a URL points at, or all pages in its space."""
    try:
        result = _service(ctx).resolve_from_url(url)
    except PageClonerError as e:
        _fail(e)
    if result["directMode"]:
        _emit(result, as_json, lambda d: format_documents([d["targetDocument"]]))
    else:
        _emit(result, as_json, lambda d: format_documents(d["documents"]))


@main.command()
@click.argument("container_key")
@click.option("--limit", type=int, default=30, show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON result")
@click.pass_context
def parents(ctx, container_key, limit, as_json):
    """List pages that can serve as a parent in a space."""
    try:
        result = _service(ctx).list_top_documents(container_key, limit=limit)
    except PageClonerError as e:
        _fail(e)
    _emit(result, as_json, lambda d: format_documents(d["documents"]))


@main.command()
@click.argument("reference")
@click.option("--name", default=None, help="Template name (default: the page title)")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON result")
@click.pass_context
def capture(ctx, reference, name, as_json):
    """Capture a page (by ID or URL) as a template."""
    is_id = reference.strip().isdigit()
    try:
        result = _service(ctx).capture_template(
            document_id=reference if is_id else None,
            url=None if is_id else reference,
            name=name,
        )
    except PageClonerError as e:
        _fail(e)
    _emit(result, as_json, lambda d: f"Template {d['id']} captured: {d['name']}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON result")
@click.pass_context
def templates(ctx, as_json):
    """List stored templates."""
    result = _service(ctx).list_templates()
    _emit(result, as_json, lambda d: format_templates(d["templates"]))


@main.command("delete-template")
@click.argument("template_id")
@click.pass_context
def delete_template(ctx, template_id):
    """Remove a stored template."""
    try:
        _service(ctx).delete_template(template_id)
    except PageClonerError as e:
        _fail(e)
    click.echo(f"Deleted template {template_id}")


@main.command()
@click.argument("titles", nargs=-1, required=True)
@click.option("--count", type=int, required=True, help="How many titles you want in total")
@click.pass_context
def suggest(ctx, titles, count):
    """Continue the progression in the given titles."""
    result = _service(ctx).suggest_titles(list(titles), count)
    if result["pattern"] is None:
        click.echo("No pattern detected.", err=True)
    else:
        click.echo(f"Detected: {result['pattern']}", err=True)
    for title in result["titles"]:
        click.echo(title)


@main.command()
@click.argument("template_id")
@click.argument("container_key")
@click.option("--title", "titles", multiple=True, help="Explicit page title (repeatable)")
@click.option("--mode", type=click.Choice(list(GENERATORS)), default=None, help="Generate titles instead")
@click.option("--base-title", default=None, help="Base title for --mode")
@click.option("--count", type=int, default=1, show_default=True, help="Number of pages for --mode")
@click.option("--start-month", default=None, help="Month name for weekly/monthly modes")
@click.option("--start-day", type=int, default=None, help="Day of month for weekly mode")
@click.option("--start-year", type=int, default=None, help="Year for date modes")
@click.option("--start-quarter", type=click.Choice(["Q1", "Q2", "Q3", "Q4"]), default=None)
@click.option(
    "--organization",
    type=click.Choice([m.value for m in OrganizationMode]),
    default=OrganizationMode.CREATE_AS_TOP_LEVEL.value,
    show_default=True,
)
@click.option("--parent-id", default=None, help="Existing parent page (attach-to-existing-parent)")
@click.option("--new-parent-title", default=None, help="Title of the parent to create first")
@click.option("--timeout", type=float, default=None, help="Give up after this many seconds")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON report")
@click.pass_context
def generate(ctx, template_id, container_key, titles, mode, base_title, count, start_month,
             start_day, start_year, start_quarter, organization, parent_id, new_parent_title,
             timeout, as_json):
    """Create pages from TEMPLATE_ID in space CONTAINER_KEY.

    Example: pagecloner generate tpl_123 TEAM --mode monthly --base-title Report
    --count 6 --start-month January --start-year 2026
    """
    if titles and mode:
        click.echo("Use either --title or --mode, not both.", err=True)
        sys.exit(2)

    if mode:
        params = {
            "start_month": start_month,
            "start_day": start_day,
            "start_year": start_year,
            "start_quarter": start_quarter,
        }
        title_source = TitleSpec(
            mode=mode,
            base_title=base_title or "",
            count=count,
            params={k: v for k, v in params.items() if v is not None},
        )
    else:
        title_source = list(titles)

    request = GenerationRequest(
        template_id=template_id,
        container_key=container_key,
        titles=title_source,
        organization_mode=OrganizationMode(organization),
        parent_document_id=parent_id,
        new_parent_title=new_parent_title,
    )

    try:
        report = _service(ctx).run_bulk_creation(request, timeout=timeout)
    except PageClonerError as e:
        click.echo(f"Could not start: {e}", err=True)
        sys.exit(2)

    _emit(report.to_dict(), as_json, lambda d: format_report(report))

    if report.created_count == 0:
        sys.exit(2)
    elif report.errors:
        sys.exit(1)
    sys.exit(0)
