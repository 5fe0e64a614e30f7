"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from pendulum import Date
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.business_source import JsonBusinessSource
from ..config import AppConfig, load_config
from ..domain.exceptions import BookingSlotsError
from ..domain.hours_resolver import ANYONE
from ..domain.models import BusinessProfile, Category
from ..domain.time_utils import to_12_hour
from ..services.availability import AvailabilityEngine
from ..services.booking_session import BookingSession

app = typer.Typer(
    name="bookingslots",
    help="Show bookable appointment slots for a business or staff member",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
BusinessOption = Annotated[Optional[Path], typer.Option("--business", "-b", help="Business JSON file. Overrides business_file from the config.")]
StaffOption = Annotated[str, typer.Option("--staff", "-s", help="Staff member id, or 'anyone'")]
DateOption = Annotated[Optional[str], typer.Option("--date", help="Date (YYYY-MM-DD). Defaults to the first bookable date.")]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    Appointment availability for salon bookings.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_session(
    config_file: Optional[Path],
    business_file: Optional[Path],
    staff: str,
) -> tuple[AppConfig, BookingSession]:
    """
    Load config and business data and open a booking session for the staff member.
    """
    config = load_config(config_file)

    path = business_file or config.business_file
    if path is None:
        console.print("[bold red]Error:[/bold red] No business file given. Use --business or set business_file in the config.")
        raise typer.Exit(1)

    business = JsonBusinessSource(path).load()
    _ensure_staff_exists(business, staff)

    engine = AvailabilityEngine.from_config(config)
    session = BookingSession(engine, business)
    if staff != ANYONE:
        session.select_staff(staff)

    return config, session


def _ensure_staff_exists(business: BusinessProfile, staff: str) -> None:
    if staff != ANYONE and business.find_staff(staff) is None:
        console.print(f"[bold red]Error:[/bold red] Unknown staff member '{staff}'.")
        raise typer.Exit(1)


def _parse_date(value: str) -> Date:
    try:
        return pendulum.from_format(value, "YYYY-MM-DD").date()
    except Exception as e:
        console.print(f"[red]Error parsing date '{value}': {e}[/red]")
        raise typer.Exit(1)


def _apply_date(session: BookingSession, date_option: Optional[str]) -> bool:
    """Select the requested date; False if it cannot be booked."""
    if not date_option:
        return True

    requested = _parse_date(date_option)
    if not session.select_date(requested):
        console.print(f"[yellow]⚠ {requested.format('YYYY-MM-DD')} is in the past or closed.[/yellow]")
        return False
    return True


@app.command()
def week(
    config_file: ConfigOption = None,
    business_file: BusinessOption = None,
    staff: StaffOption = ANYONE,
    date: DateOption = None,
    offset: Annotated[int, typer.Option("--offset", help="Weeks to move forward (or back, if negative).")] = 0,
):
    """
    Show the week strip with bookable days and slot counts.
    """
    try:
        _, session = _load_session(config_file, business_file, staff)
        if not _apply_date(session, date):
            return

        for _ in range(abs(offset)):
            if offset > 0:
                session.next_week()
            else:
                session.previous_week()

        table = Table(
            title=session.week_range_label(),
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Day", style="bold")
        table.add_column("Date")
        table.add_column("Bookable")
        table.add_column("Slots", justify="right")

        calendar = session.engine.calendar
        for day in session.week:
            bookable = not session.is_date_disabled(day)
            slot_count = len(session.engine.available_slots(
                day,
                session.selected_staff_id,
                session.staff_schedule,
                session.business.business_hours,
            )) if bookable else 0
            marker = " ◀" if day == session.selected_date else ""
            table.add_row(
                calendar.day_label(day) + marker,
                day.format("YYYY-MM-DD"),
                "[green]yes[/green]" if bookable else "[dim]no[/dim]",
                str(slot_count),
            )

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError, BookingSlotsError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def slots(
    config_file: ConfigOption = None,
    business_file: BusinessOption = None,
    staff: StaffOption = ANYONE,
    date: DateOption = None,
    twelve_hour: Annotated[bool, typer.Option("--12h", help="Show times as 12-hour clock.")] = False,
):
    """
    Show the available slots of a day, grouped into morning, evening and night.

    Examples:

        bookingslots slots --business business.json
        bookingslots slots -b business.json --staff 12 --date 2026-10-20
    """
    try:
        _, session = _load_session(config_file, business_file, staff)
        if not _apply_date(session, date):
            return

        categorized = session.categorized_slots()
        who = "anyone" if staff == ANYONE else session.business.find_staff(staff).name

        console.print(
            f"\n[bold cyan]{session.selected_date.format('dddd, MMM D, YYYY')}[/bold cyan] ({who})\n"
        )

        if categorized.is_empty():
            console.print("[yellow]⚠ No slots available on this day.[/yellow]\n")
            return

        for category in Category:
            bucket = categorized.bucket(category)
            if not bucket:
                continue

            labels = []
            for slot in bucket:
                text = to_12_hour(slot) if twelve_hour else slot
                if session.is_slot_disabled(slot):
                    labels.append(f"[dim strike]{text}[/dim strike]")
                else:
                    labels.append(f"[green]{text}[/green]")

            console.print(f"[bold]{category.value.capitalize()}[/bold]: " + "  ".join(labels))

        console.print()

    except (FileNotFoundError, ValueError, BookingSlotsError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def next_available(
    config_file: ConfigOption = None,
    business_file: BusinessOption = None,
    staff: StaffOption = ANYONE,
):
    """
    Show the first bookable date within the configured horizon.
    """
    try:
        config, session = _load_session(config_file, business_file, staff)

        found = session.engine.first_bookable_date(
            staff_id=session.selected_staff_id,
            staff_schedule=session.staff_schedule,
            business_schedule=session.business.business_hours,
        )

        if found is None:
            console.print(
                f"[yellow]⚠ No bookable date in the next {config.auto_select_horizon_days} days.[/yellow]"
            )
            raise typer.Exit(1)

        console.print(f"[bold green]✓ {found.format('YYYY-MM-DD')}[/bold green] ({found.format('dddd')})")

    except (FileNotFoundError, ValueError, BookingSlotsError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def staff(
    config_file: ConfigOption = None,
    business_file: BusinessOption = None,
):
    """
    List the staff members of the business.
    """
    try:
        _, session = _load_session(config_file, business_file, ANYONE)
        business = session.business

        if not business.staff:
            console.print("[yellow]No staff members listed for this business.[/yellow]")
            return

        table = Table(
            title=business.name or f"Business {business.business_id}",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("ID", style="bold yellow")
        table.add_column("Name")
        table.add_column("Working hours", style="dim")

        for member in business.staff:
            hours = member.working_hours
            if hours is None:
                summary = "not set"
            else:
                open_days = [name[:3] for name, day in hours.days.items() if day.is_open]
                summary = ", ".join(open_days) or "closed"
            table.add_row(member.id, member.name, summary)

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError, BookingSlotsError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]bookingslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
