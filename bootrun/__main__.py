"""Entry point for ``python -m bootrun`` and the ``bootrun`` console script."""


def main():
    from .cli import cli

    cli()


if __name__ == "__main__":
    main()
