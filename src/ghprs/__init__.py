"""ghprs: watch a GitHub pull request until it is ready to merge."""
