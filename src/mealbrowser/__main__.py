from mealbrowser.app import main

main()
