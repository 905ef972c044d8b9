from prismapack.cli.main import main

main()
