from nodegen.pipeline import main

main()
