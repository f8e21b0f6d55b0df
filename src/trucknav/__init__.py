"""Truck navigation client: profiles, route requests and route results."""
