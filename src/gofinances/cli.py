from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from .errors import GoFinancesError
from .locales import get_locale
from .models import UserSession
from .session import get_current_user, sign_in, sign_out
from .store import JsonFileTransactionStore, KeyringTransactionStore
from .summary import print_highlights, print_transactions

app = typer.Typer(help="GoFinances transaction summary CLI", no_args_is_help=True)


class OutputFormat(str, Enum):
    """Output format options."""

    table = "table"
    json = "json"
    csv = "csv"


def _resolve_user(user: Optional[str], verbose: bool) -> str:
    """Get the user id from the option or the saved session."""
    if user:
        return user

    session = get_current_user()
    if not session:
        print("No user signed in. Run 'gofinances login' or pass --user.")
        raise typer.Exit(code=1)

    if verbose:
        print(f"Using session of {session.name or session.id}")
    return session.id


def _open_store(file: Optional[Path]):
    if file:
        return JsonFileTransactionStore(file)
    return KeyringTransactionStore()


@app.command()
def login(
    user_id: str = typer.Option(..., "--id", "-i", help="User id keying the store."),
    name: str = typer.Option(..., "--name", "-n", help="Display name."),
    photo: Optional[str] = typer.Option(
        None, "--photo", "-p", help="Avatar URL of the user."
    ),
):
    """
    Save the signed-in user so later commands know whose data to read.
    """
    try:
        sign_in(UserSession(id=user_id, name=name, photo=photo))
    except GoFinancesError as e:
        print(f"Error saving session: {e}")
        raise typer.Exit(code=1)
    print(f"✓ Signed in as {name}")


@app.command()
def logout():
    """
    Clear the stored user session.
    """
    try:
        sign_out()
    except GoFinancesError as e:
        print(f"Error clearing session: {e}")
        raise typer.Exit(code=1)


@app.command()
def summary(
    ctx: typer.Context,
    user: Optional[str] = typer.Option(
        None,
        "--user",
        "-u",
        envvar="GOFINANCES_USER",
        help="User id. If not provided, uses the signed-in user.",
    ),
    file: Optional[Path] = typer.Option(
        None, "--file", help="Read transactions from a JSON file instead of keyring."
    ),
    locale: str = typer.Option(
        "pt-BR", "--locale", "-l", envvar="GOFINANCES_LOCALE", help="Locale code."
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.table, "--format", "-f", help="Output format."
    ),
):
    """
    Show the entries, expenses and total highlight cards.
    """
    verbose = ctx.obj.get("verbose") if ctx.obj else False
    try:
        user_id = _resolve_user(user, verbose)
        print_highlights(
            _open_store(file),
            user_id,
            locale=get_locale(locale),
            output_format=output_format.value,
            verbose=verbose,
        )
    except typer.Exit:
        raise
    except Exception as e:
        print(f"Error loading transactions: {e}")
        print("Fix the problem and run the command again to retry.")
        raise typer.Exit(code=1)


@app.command()
def transactions(
    ctx: typer.Context,
    user: Optional[str] = typer.Option(
        None,
        "--user",
        "-u",
        envvar="GOFINANCES_USER",
        help="User id. If not provided, uses the signed-in user.",
    ),
    file: Optional[Path] = typer.Option(
        None, "--file", help="Read transactions from a JSON file instead of keyring."
    ),
    locale: str = typer.Option(
        "pt-BR", "--locale", "-l", envvar="GOFINANCES_LOCALE", help="Locale code."
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.table, "--format", "-f", help="Output format."
    ),
):
    """
    List transactions in stored order.
    """
    verbose = ctx.obj.get("verbose") if ctx.obj else False
    try:
        user_id = _resolve_user(user, verbose)
        print_transactions(
            _open_store(file),
            user_id,
            locale=get_locale(locale),
            output_format=output_format.value,
            verbose=verbose,
        )
    except typer.Exit:
        raise
    except Exception as e:
        print(f"Error loading transactions: {e}")
        print("Fix the problem and run the command again to retry.")
        raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show detailed status messages during execution."
    ),
):
    """
    GoFinances transaction summary CLI
    """
    ctx.obj = {"verbose": verbose}
