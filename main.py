from rich.pretty import pprint

from argbox import *


def setup(cli):
    cli.on("--env", "-e").string()
    cli.on("--verbose", "-v").count()


if __name__ == '__main__':
    cli = CLI(setup, shell=True)
    files = cli.rest.strings()
    invoke(cli)
    pprint({"triggers": cli.triggers, "files": files})
