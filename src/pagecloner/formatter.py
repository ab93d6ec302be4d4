"""Plain-text rendering of results for the terminal."""

from .models import GenerationReport


def format_report(report: GenerationReport) -> str:
    """Summary line plus one line per created page and per failure."""
    if report.all_succeeded:
        headline = f"Successfully created {report.created_count} page(s)"
    elif report.created_count == 0:
        headline = f"No pages created: all {report.total_requested} failed"
    else:
        headline = (
            f"{report.created_count} of {report.total_requested} pages created, "
            f"{len(report.errors)} failed"
        )
    if report.timed_out:
        headline += " (timed out)"

    lines = [headline]
    if report.parent_id:
        lines.append(f"Parent page: {report.parent_id}")
    for page in report.pages:
        lines.append(f"  [{page.index + 1}] {page.title} -> {page.url}")
    if report.errors:
        lines.append("Failures:")
        for failure in report.errors:
            lines.append(f"  [{failure.index + 1}] {failure.title}: {failure.error}")
    return "\n".join(lines)


def format_documents(documents: list[dict]) -> str:
    if not documents:
        return "No pages found."
    return "\n".join(
        f"{d['id']:>12}  {d['containerKey']:<10}  {d['title']}" for d in documents
    )


def format_containers(containers: list[dict]) -> str:
    if not containers:
        return "No spaces found."
    return "\n".join(f"{c['key']:<12}  {c['id']:>12}  {c['name']}" for c in containers)


def format_templates(templates: list[dict]) -> str:
    if not templates:
        return "No templates stored."
    return "\n".join(
        f"{t['id']}  {t['createdAt'][:19]}  {t['name']} (from '{t['sourceTitle']}')"
        for t in templates
    )
