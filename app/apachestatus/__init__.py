"""Nagios probe for the Apache mod_status page."""
