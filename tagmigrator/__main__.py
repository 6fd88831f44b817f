from tagmigrator.main import cli

cli()
