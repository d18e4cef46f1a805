"""Interactive CLI application."""
import logging
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from leitner_cards.buckets import get_bucket_range, to_bucket_sets
from leitner_cards.db import init_db, DEFAULT_DB_PATH
from leitner_cards.deck import (
    add_card, advance_day, get_card_hint, get_current_day, get_practice_session,
    load_buckets, load_history, record_practice,
)
from leitner_cards.importer import import_cards
from leitner_cards.leitner import MAX_BUCKET
from leitner_cards.models import AnswerDifficulty, HintRequest, PracticeSession, UpdateRequest
from leitner_cards.progress import (
    compute_progress, get_progress_color, get_progress_label, reviews_per_bucket,
)

console = Console()

EXIT_WORDS = ("q", "menu")


class SessionExitRequested(Exception):
    """Raised when the user leaves a practice session early."""


def session_prompt(prompt: str, **kwargs) -> str:
    answer = Prompt.ask(prompt, **kwargs)
    if answer.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return answer


def session_int_prompt(prompt: str, choices: list[str]) -> int:
    answer = session_prompt(prompt, choices=choices + list(EXIT_WORDS), show_choices=False)
    return int(answer)


def show_welcome():
    console.print(Panel(
        "[bold]Leitner Flashcards[/bold]\n[dim]Spaced repetition, one bucket at a time[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("practice", "Review today's due cards"),
        ("add", "Add a flashcard"),
        ("import", "Import cards from a file"),
        ("stats", "Progress statistics"),
        ("next", "Move on to the next day"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def run_practice_session(db_path: str, session: PracticeSession) -> int:
    """Walk through the session's cards, recording each rating as it is given."""
    if not session.cards:
        console.print(f"[yellow]No cards due on day {session.day}![/yellow]")
        return 0
    console.print(f"\n[bold]Practice Session[/bold] — day {session.day}, {len(session.cards)} cards\n")
    reviewed = 0
    for i, card in enumerate(session.cards, 1):
        console.print(Panel(card.front, title=f"Card {i}/{len(session.cards)}", border_style="cyan"))
        answer = session_prompt("[dim]Enter to reveal, 'h' for a hint[/dim]", default="")
        if answer.strip().lower() == "h":
            hint = get_card_hint(db_path, HintRequest(card_front=card.front, card_back=card.back))
            console.print(f"[magenta]Hint:[/magenta] {hint}")
            session_prompt("[dim]Press Enter to reveal answer[/dim]", default="")
        console.print(Panel(card.back, border_style="green"))
        rating = session_int_prompt("Rate yourself (0=wrong, 1=hard, 2=easy)", choices=["0", "1", "2"])
        record = record_practice(
            db_path,
            UpdateRequest(card_front=card.front, card_back=card.back, difficulty=AnswerDifficulty(rating)),
            day=session.day,
        )
        console.print(f"[dim]Bucket {record.previous_bucket} → {record.new_bucket}[/dim]\n")
        reviewed += 1
    return reviewed


def cmd_practice(db_path: str):
    session = get_practice_session(db_path)
    try:
        reviewed = run_practice_session(db_path, session)
    except SessionExitRequested:
        console.print("[dim]Session ended early. Reviews so far are saved.[/dim]")
        return
    if reviewed:
        console.print(f"[green]Reviewed {reviewed} cards. Use 'next' when you're done for the day.[/green]")


def cmd_add(db_path: str):
    front = Prompt.ask("Front")
    back = Prompt.ask("Back")
    hint = Prompt.ask("Hint (optional)", default="")
    tags = Prompt.ask("Tags, comma separated (optional)", default="")
    card = add_card(db_path, front, back, hint, [t.strip() for t in tags.split(",") if t.strip()])
    console.print(f"[green]Added '{card.front}' to bucket 0.[/green]")


def cmd_import(db_path: str):
    file_path = Prompt.ask("File path")
    if not Path(file_path).exists():
        console.print(f"[red]File not found: {file_path}[/red]")
        return
    result = import_cards(db_path, file_path)
    console.print(
        f"[green]Imported {result['added']} cards from {result['filename']}[/green]"
        + (f" [yellow]({result['skipped']} skipped)[/yellow]" if result["skipped"] else "")
    )


def cmd_stats(db_path: str):
    buckets = load_buckets(db_path)
    history = load_history(db_path)
    stats = compute_progress(buckets, history)
    label = get_progress_label(stats)
    color = get_progress_color(stats)
    day = get_current_day(db_path)

    console.print(Panel(f"[bold]Day {day}[/bold]", title="Progress Dashboard", border_style="blue"))

    bar_filled = int(stats.average_bucket / MAX_BUCKET * 20)
    bar = f"[{color}]{'█' * bar_filled}{'░' * (20 - bar_filled)}[/{color}]"
    console.print(f"\n  Average bucket: [bold]{stats.average_bucket:.2f}[/bold] {bar} [{color}]{label}[/{color}]")
    console.print(f"  Cards: [bold]{stats.total_cards}[/bold]  |  "
                  f"Reviews: [bold]{len(history)}[/bold]  |  "
                  f"Accuracy: [bold]{stats.accuracy_rate:.1f}%[/bold]\n")

    reviews = reviews_per_bucket(buckets, history)
    table = Table(title="Buckets")
    table.add_column("Bucket", justify="right", style="cyan")
    table.add_column("Every", justify="right")
    table.add_column("Cards", justify="right")
    table.add_column("Reviews", justify="right")
    for bucket in sorted(stats.bucket_distribution):
        table.add_row(
            str(bucket),
            f"{2 ** bucket} day(s)",
            str(stats.bucket_distribution[bucket]),
            str(reviews.get(bucket, 0)),
        )
    console.print(table)

    occupied = get_bucket_range(to_bucket_sets(buckets))
    if occupied:
        console.print(f"  Occupied buckets: {occupied[0]}–{occupied[1]}")

    if stats.practice_history:
        console.print("\n[bold]Reviews per day:[/bold]")
        for practice_day in sorted(stats.practice_history):
            console.print(f"  Day {practice_day:<4} {stats.practice_history[practice_day]}")


def cmd_next(db_path: str):
    day = advance_day(db_path)
    due = len(get_practice_session(db_path, day).cards)
    console.print(f"[green]It's day {day}. {due} cards due.[/green]")


def main():
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s - %(levelname)s - %(message)s")
    db_path = DEFAULT_DB_PATH
    init_db(db_path)

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="practice").strip().lower()
        try:
            if choice == "practice":
                cmd_practice(db_path)
            elif choice == "add":
                cmd_add(db_path)
            elif choice == "import":
                cmd_import(db_path)
            elif choice == "stats":
                cmd_stats(db_path)
            elif choice == "next":
                cmd_next(db_path)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]See you tomorrow![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
