from modu.cli import main

main()
