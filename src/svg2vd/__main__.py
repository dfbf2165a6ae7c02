from svg2vd import main

main()
