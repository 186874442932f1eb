from .dashboard import Dashboard, Failed, Loaded
from .formatters import get_formatter
from .locales import DEFAULT_LOCALE, LocaleConfig
from .store import TransactionStore


def get_dashboard_data(
    store: TransactionStore,
    user_id: str,
    locale: LocaleConfig = DEFAULT_LOCALE,
) -> Loaded:
    """Load and aggregate a user's transactions.

    Args:
        store: Transaction store to read from
        user_id: Owner of the transactions
        locale: Formatting conventions

    Returns:
        Loaded state with normalized transactions and highlights

    Raises:
        StoreUnavailableError: If the store cannot be read
        MalformedRecordError: If the stored data cannot be parsed
    """
    state = Dashboard(store, user_id, locale).on_load()
    if isinstance(state, Failed):
        raise state.error
    return state


def print_highlights(
    store: TransactionStore,
    user_id: str,
    locale: LocaleConfig = DEFAULT_LOCALE,
    output_format: str = "table",
    verbose: bool = False,
) -> None:
    """Fetch transactions and print the entries/expenses/total cards.

    Args:
        store: Transaction store to read from
        user_id: Owner of the transactions
        locale: Formatting conventions
        output_format: Output format - 'table', 'json', or 'csv' (default 'table')
        verbose: If True, print status messages during execution
    """
    if verbose:
        print(f"\nFetching transactions for user {user_id}...")

    data = get_dashboard_data(store, user_id, locale)

    if verbose:
        print(f"Aggregated {len(data.transactions)} transactions.")

    formatter = get_formatter(output_format)
    print(formatter.format_highlights(data.highlights))


def print_transactions(
    store: TransactionStore,
    user_id: str,
    locale: LocaleConfig = DEFAULT_LOCALE,
    output_format: str = "table",
    verbose: bool = False,
) -> None:
    """Fetch and print transactions in stored order.

    Args:
        store: Transaction store to read from
        user_id: Owner of the transactions
        locale: Formatting conventions
        output_format: Output format - 'table', 'json', or 'csv' (default 'table')
        verbose: If True, print status messages during execution
    """
    if verbose:
        print(f"\nFetching transactions for user {user_id}...")

    data = get_dashboard_data(store, user_id, locale)

    if not data.transactions:
        print("No transactions found.")
        return

    formatter = get_formatter(output_format)
    print(formatter.format_transactions(data.transactions))
