"""``python -m hellosite``: the same as the ``hellosite`` command."""

from hellosite.cli import main

main()
