from ejectwheel.main import main

main()
