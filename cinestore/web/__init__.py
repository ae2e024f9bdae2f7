"""Interface HTTP JSON de CineStore."""
