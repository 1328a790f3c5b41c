"""
Command-line interface for category-topics.

Usage:
    category-topics analyze entries.jsonl            # records carry a category
    category-topics analyze entries.csv --labels demographic.csv \\
        --join-key wid --category-field marital      # join labels by shared id
    category-topics normalize "I love my family and my dog"
"""

import sys

import click

from category_topics.analysis.orchestrator import CategoryOrchestrator
from category_topics.config.analysis import ConfigurationError, build_config
from category_topics.config.settings import get_settings
from category_topics.ingestion.loader import load_records, merge_records
from category_topics.observability.logging import get_logger, setup_logging
from category_topics.observability.metrics import get_metrics
from category_topics.text.normalizer import Normalizer


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """Category Topics - vocabulary, clusters and topics per category."""
    if debug:
        import os
        os.environ["LOG_LEVEL"] = "DEBUG"
        get_settings.cache_clear()

    setup_logging()


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--labels", "labels_path", type=click.Path(exists=True, dir_okay=False),
              help="Second table holding the category label (joined on --join-key)")
@click.option("--join-key", default=None, help="Identifier shared by entries and labels")
@click.option("--category-field", default="category", help="Label column in --labels")
@click.option("--id-field", default="id", help="Entry id column")
@click.option("--text-field", default="text", help="Entry text column")
@click.option("--exclude", multiple=True, help="Category label to exclude (can repeat)")
@click.option("--k-clusters", default=None, type=int, help="Clusters per category")
@click.option("--k-topics", default=None, type=int, help="Topics per category")
@click.option("--top-n", default=None, type=int, help="Terms listed per cluster/topic")
@click.option("--seed", default=None, type=int, help="Random seed")
@click.option("--workers", default=None, type=int, help="Categories analyzed concurrently")
@click.option("--output", "-o", type=click.Path(dir_okay=False, writable=True),
              help="Write the JSON report here instead of stdout")
@click.option("--metrics/--no-metrics", default=lambda: get_settings().metrics_enabled,
              show_default="METRICS_ENABLED setting", help="Expose Prometheus metrics")
def analyze(
    path: str,
    labels_path: str | None,
    join_key: str | None,
    category_field: str,
    id_field: str,
    text_field: str,
    exclude: tuple[str, ...],
    k_clusters: int | None,
    k_topics: int | None,
    top_n: int | None,
    seed: int | None,
    workers: int | None,
    output: str | None,
    metrics: bool,
) -> None:
    """Analyze a JSON-lines, JSON or CSV file of entries and print the report."""
    logger = get_logger(__name__)

    overrides = {
        "k_clusters": k_clusters,
        "k_topics": k_topics,
        "top_n_terms": top_n,
        "random_seed": seed,
        "max_workers": workers,
    }
    try:
        config = build_config(**{k: v for k, v in overrides.items() if v is not None})
    except ConfigurationError as e:
        raise click.UsageError(str(e)) from e

    if metrics:
        get_metrics().start_server()

    try:
        records = load_records(path)
        if labels_path:
            if not join_key:
                raise click.UsageError("--join-key is required with --labels")
            records = merge_records(
                records,
                load_records(labels_path),
                key=join_key,
                category_field=category_field,
                id_field=id_field,
                text_field=text_field,
            )
        elif id_field != "id" or text_field != "text" or category_field != "category":
            records = [
                {
                    "id": r.get(id_field),
                    "text": r.get(text_field),
                    "category": r.get(category_field),
                }
                for r in records
            ]
    except (OSError, ValueError) as e:
        logger.error("Failed to load records", path=path, error=str(e))
        sys.exit(1)

    report = CategoryOrchestrator(config).run(records, categories_to_exclude=set(exclude))
    payload = report.to_json()

    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(payload + "\n")
        click.echo(f"Report written to {output} ({len(report.categories)} categories)")
    else:
        click.echo(payload)


@main.command()
@click.argument("text")
def normalize(text: str) -> None:
    """Print the normalized stems of TEXT, one per line."""
    for token in Normalizer(build_config()).normalize(text):
        click.echo(token)


if __name__ == "__main__":
    main()
