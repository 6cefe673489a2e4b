from cargo_bake.cli import main

main()
