from blkcopy.cli import cli

cli(prog_name="blkcopy")
