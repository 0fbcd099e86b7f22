"""lernspark subcommands, loaded lazily by the main group."""
