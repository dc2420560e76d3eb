from pr_auto_ready.cli import main

main()
