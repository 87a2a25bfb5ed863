"""Entry point for the N-Queens solver comparison.

Equivalent to the ``queensearch`` console script; see
``queensearch.analysis.cli`` for the available options.
"""

from queensearch.analysis.cli import main


if __name__ == "__main__":
    main()
