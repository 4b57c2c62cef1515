"""robots.txt generation command."""

from pathlib import Path

from indexed.cli._common import app, fail, load_manifest, manifest_argument, output_option, write_output
from indexed.exceptions import IndexedError
from indexed.models import RobotsManifest
from indexed.robots import RobotsTxt


def build_robots(manifest: RobotsManifest) -> RobotsTxt:
    """
    Build a robots.txt builder from a manifest.

    Args:
        manifest: Validated robots manifest.

    Returns:
        Populated builder.
    """
    robots = RobotsTxt()

    for rules in manifest.agents:
        agent = rules.agent
        for url in rules.allow:
            robots.allow(url, agent)
        for url in rules.disallow:
            robots.disallow(url, agent)
        for url in rules.sitemaps:
            robots.sitemap(url, agent)
        if rules.crawl_delay is not None:
            robots.crawl_delay(rules.crawl_delay, agent)
        for window in rules.visit_times:
            robots.visit_time(window.start, window.end, agent)
        for rate in rules.request_rates:
            robots.request_rate(rate.documents, rate.start, rate.end, agent)
        for text in rules.comments:
            robots.comment(text, agent)

    return robots


@app.command("robots", help="Generate robots.txt from a JSON manifest.")
@manifest_argument
@output_option
def robots_cmd(manifest: Path, output: Path | None) -> None:
    """Generate robots.txt.

    Examples:
        indexed robots robots.json
        indexed robots robots.json --output public/robots.txt
    """
    try:
        spec = load_manifest(manifest, RobotsManifest)
        content = build_robots(spec).generate()
    except IndexedError as e:
        fail(e)

    write_output(content, output, "robots.txt")
