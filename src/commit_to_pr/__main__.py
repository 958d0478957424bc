"""Allow running the server with `python -m commit_to_pr`."""

from commit_to_pr.server import main

main()
