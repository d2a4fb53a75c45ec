"""
Configurator Tool Package

Visibility rules and price estimation for the product configurator.
Resolves a price range from base pricing, option modifiers and catalogue items,
and serves the calculate/submit endpoints the quote wizard talks to.
"""

__version__ = "1.0.0"
