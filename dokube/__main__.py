"""
CLI entry point, when used as a module: `python -m dokube`.

Useful for debugging in the IDEs (use the start-mode "Module", module "dokube").
"""
from dokube import cli

if __name__ == '__main__':
    cli.main()
