from reenter.cli import main

main()
