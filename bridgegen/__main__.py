from bridgegen.cli import main

main()
