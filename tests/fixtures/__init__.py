"""Test fixtures for the PacketTracer Anywhere client.

This package provides scripted httpx transports and sample API payloads.
"""
