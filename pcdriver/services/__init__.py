"""
Driver Services

- system: machine collaborators (metrics, reboot, speech)
- driver: the PC driver itself
"""
