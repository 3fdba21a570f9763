"""Shell conveniences: process signaling, PATH inspection and workspaces."""
