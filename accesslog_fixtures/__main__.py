from accesslog_fixtures.cli import main

if __name__ == "__main__":
    main()
