"""Constituency office locator: office data, nearest lookup and map viewport sync."""
