"""
AMAL Deployment Migrations
==========================

Numbered migration scripts and the small runner that applies them to a network.

Structure:
- runner.py: discovers and runs the numbered migrations
- deployer.py: signs and submits contract deployments
- artifacts.py: resolves compiled contract artifacts by name
- config.py: environment configuration
"""

__version__ = "1.0.0"
__author__ = "AMAL Team"
