from rinha.cmdline import main

main()
