from ztcentral.cli import main

main()
