"""memodeck CLI: queue, rating, stats and quiz commands over YAML deck files."""

import json
import logging
import random
import sys
from pathlib import Path
from typing import Annotated

import typer

from memodeck.application.config import resolve_config
from memodeck.application.id_service import new_card
from memodeck.application.queue_selector import select_queue
from memodeck.application.quiz import QuizUnavailableError, generate_quiz, is_quiz_eligible
from memodeck.application.review_log import reviews_done_today
from memodeck.application.review_service import (
    CardNotFoundError,
    InvalidRatingError,
    ReviewService,
    StaleStateError,
    SuspendedCardError,
    find_card,
)
from memodeck.application.scheduler import preview_intervals
from memodeck.application.stats import MetricsCalculator
from memodeck.domain.models import QuizMode
from memodeck.infrastructure.deck_file import DeckFileError, card_to_yaml
from memodeck.interface._common import (
    _resolve_with_overrides,
    echo_json,
    fail,
    load_snapshot,
    parse_now,
)

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="memodeck: SM-2 spaced repetition for flashcard decks.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]

# ---------------------------------------------------------------------------
# Register subgroups
# ---------------------------------------------------------------------------

config_app = typer.Typer(help="Manage memodeck configuration.")
app.add_typer(config_app, name="config")

DeckArg = Annotated[Path, typer.Argument(help="Path to a YAML deck file.")]
NowOpt = Annotated[
    str | None,
    typer.Option("--now", help="Evaluate at this ISO-8601 time instead of the current time."),
]


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for memodeck."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    # -v adds to the configured base verbosity
    level = resolve_config().verbose + verbose
    logging.getLogger("memodeck").setLevel(LOG_LEVELS[min(level, len(LOG_LEVELS) - 1)])


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command("queue")
def queue(
    deck_file: DeckArg,
    now: NowOpt = None,
    new_limit: Annotated[
        int | None, typer.Option("--new-limit", min=0, help="Override the daily new-card limit.")
    ] = None,
    review_limit: Annotated[
        int | None,
        typer.Option("--review-limit", min=0, help="Override the daily review limit."),
    ] = None,
    sort_by_due: Annotated[
        bool | None,
        typer.Option("--sort-by-due/--input-order", help="Order each list by due time."),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show today's [bold green]review queue[/bold green] for a deck.

    Cards are split into new, learning and due lists. New cards are capped
    by the daily new limit, due cards by what is left of the daily review
    limit after today's reviews, learning cards by a fixed ceiling.
    """
    config = _resolve_with_overrides(sort_by_due=sort_by_due)
    at = parse_now(now)

    try:
        deck = load_snapshot(deck_file, at, config)
    except DeckFileError as e:
        fail(str(e))

    daily_new = new_limit if new_limit is not None else deck.limits.daily_new_limit
    daily_review = review_limit if review_limit is not None else deck.limits.daily_review_limit
    done = reviews_done_today(deck.reviews, at)

    result = select_queue(
        deck.cards,
        at,
        daily_new_limit=daily_new,
        daily_review_limit=daily_review,
        reviews_done_today=done,
        learning_cap=config.learning_queue_cap,
        sort_by_due=config.sort_by_due,
    )

    if json_output:
        echo_json(
            {
                "queue": {"new": result.new, "learning": result.learning, "due": result.due},
                "session": result.session_order(),
                "stats": {
                    "reviews_done_today": done,
                    "daily_new_limit": daily_new,
                    "daily_review_limit": daily_review,
                },
            }
        )
        return

    typer.echo(f"Deck: {deck.name}")
    typer.echo(
        f"New: {len(result.new)}  Learning: {len(result.learning)}  Due: {len(result.due)}"
        f"  (reviews today: {done}/{daily_review})"
    )
    if not result.total:
        typer.secho("Nothing to study right now.", fg="green")
        return
    for card_id in result.session_order():
        typer.echo(f"  {card_id}")


@app.command("rate")
def rate(
    deck_file: DeckArg,
    card_id: Annotated[str, typer.Argument(help="Id of the card being rated.")],
    rating: Annotated[str, typer.Argument(help="again, hard, good or easy.")],
    now: NowOpt = None,
    expected_version: Annotated[
        int | None,
        typer.Option("--expected-version", help="Refuse if the card's state version differs."),
    ] = None,
):
    """Compute the new state for a rating and print it as JSON.

    The deck file is not modified; persisting the result is up to the caller.
    """
    config = _resolve_with_overrides()
    at = parse_now(now)

    try:
        deck = load_snapshot(deck_file, at, config)
        card = find_card(deck.cards, card_id)
        outcome = ReviewService().submit(card, rating, now=at, expected_version=expected_version)
    except (
        DeckFileError,
        CardNotFoundError,
        InvalidRatingError,
        SuspendedCardError,
        StaleStateError,
    ) as e:
        fail(str(e))

    echo_json(
        {
            "card_id": outcome.card.id,
            "state": outcome.card.state,
            "log_entry": outcome.log_entry,
        }
    )


@app.command("preview")
def preview(
    deck_file: DeckArg,
    card_id: Annotated[str, typer.Argument(help="Id of the card to preview.")],
):
    """Show the interval (days) each rating would give a card."""
    config = _resolve_with_overrides()
    at = parse_now(None)

    try:
        deck = load_snapshot(deck_file, at, config)
        card = find_card(deck.cards, card_id)
    except (DeckFileError, CardNotFoundError) as e:
        fail(str(e))

    intervals = preview_intervals(card.state)
    echo_json({rating.value: days for rating, days in intervals.items()})


@app.command("stats")
def stats(
    deck_file: DeckArg,
    now: NowOpt = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Count new, learning, review and suspended cards in a deck."""
    config = _resolve_with_overrides()
    at = parse_now(now)

    try:
        deck = load_snapshot(deck_file, at, config)
    except DeckFileError as e:
        fail(str(e))

    summary = MetricsCalculator().summarize(deck.cards, at)

    if json_output:
        echo_json(summary)
        return

    typer.echo(f"Deck: {deck.name}")
    typer.echo(
        f"Total: {summary.total}  New: {summary.new}  Learning: {summary.learning}"
        f"  Review: {summary.review}  Suspended: {summary.suspended}"
    )


@app.command("quiz")
def quiz(
    deck_file: DeckArg,
    count: Annotated[
        int | None, typer.Option("--count", min=1, help="Number of questions.")
    ] = None,
    mode: Annotated[
        QuizMode | None, typer.Option("--mode", help="Use one question mode for every question.")
    ] = None,
    seed: Annotated[
        int | None, typer.Option("--seed", help="Seed for a reproducible quiz.")
    ] = None,
):
    """Generate a picture quiz from cards that have media attached."""
    config = _resolve_with_overrides(quiz_question_count=count)
    at = parse_now(None)

    try:
        deck = load_snapshot(deck_file, at, config)
        questions = generate_quiz(
            deck.cards,
            count=config.quiz_question_count,
            mode=mode,
            rng=random.Random(seed),
        )
    except (DeckFileError, QuizUnavailableError) as e:
        fail(str(e))

    eligible = sum(map(is_quiz_eligible, deck.cards))
    echo_json({"questions": questions, "total_cards": eligible})


@app.command("new-card")
def new_card_cmd(
    front: Annotated[str, typer.Option("--front", help="Front text.")],
    back: Annotated[str | None, typer.Option("--back", help="Back text.")] = None,
    media: Annotated[
        list[str] | None, typer.Option("--media", help="Media URL. Repeat for more.")
    ] = None,
    tag: Annotated[list[str] | None, typer.Option("--tag", help="Tag. Repeat for more.")] = None,
    now: NowOpt = None,
):
    """Print a YAML stub for a new card, ready to paste into a deck file."""
    card = new_card(front, back=back, media_urls=media or [], tags=tag or [], now=parse_now(now))
    typer.echo(card_to_yaml(card), nl=False)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    typer.echo(json.dumps(config.model_dump(), indent=2))
