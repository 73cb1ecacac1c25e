"""Entry point for account-ledger."""

from account_ledger.api import AccountResource, ApiClient, TransactionResource
from account_ledger.app import AccountLedgerApp
from account_ledger.config import (
    load_log_settings,
    load_theme,
    load_timeout,
    parse_args,
    resolve_api_url,
)
from account_ledger.logging_setup import configure_logging


def main() -> None:
    """Run the account-ledger application."""
    args = parse_args()
    log_level, log_file = load_log_settings()
    configure_logging(args.log_level or log_level, log_file=log_file)

    client = ApiClient(resolve_api_url(cli_url=args.url), timeout=load_timeout())
    try:
        app = AccountLedgerApp(
            AccountResource(client),
            TransactionResource(client),
            theme=load_theme(),
        )
        app.run()
    finally:
        client.close()


if __name__ == "__main__":
    main()
