"""Not a generator: no generate function."""

NAME = "constants"
