"""Thin HTTP facade over the NYTimes archive API with day/hour filtering."""
