from keysense.cli import main

main()
