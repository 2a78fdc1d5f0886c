"""Entry point: python -m gh_manager"""

from gh_manager.main import cli

if __name__ == "__main__":
    cli()
