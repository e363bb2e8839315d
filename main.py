"""log-search — interactively search one log index by field and value."""

from log_search.cli import main

if __name__ == "__main__":
    main()
