"""Allow ``python -m spectrum``."""

from spectrum.main import run

run()
