"""
Support modules: constants and precision settings, scalar conversions,
decimal trigonometry, errors and plotting.
"""
