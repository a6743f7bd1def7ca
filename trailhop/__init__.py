"""Top-level package for the Skåneleden hike planner.

Turns GPS tracks of trail stages and public transport stop areas into a
catalogue of walks between stops, then ranks full day trips (bus or
train out, walk, bus or train home) against live journey data.
"""
