"""Protocol engine interface for sessions running over a bootstrapped connection."""
