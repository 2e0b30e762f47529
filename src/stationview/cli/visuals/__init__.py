from .rich_console import (
    fetch_status,
    install_rich_logging,
    print_summary,
    stderr_console,
    summary_table,
    use_rich,
)

__all__ = [
    "fetch_status",
    "install_rich_logging",
    "print_summary",
    "stderr_console",
    "summary_table",
    "use_rich",
]
