from logspectrum.main import main

main()
