"""Text generation backends for shsh."""
