#!/usr/bin/env python3
"""
Send one call of each kind to Threads.io.

Reads THREADSIO_* variables from .env (see ThreadsIoClient.from_env).
Set THREADSIO_MOCK=true to try it without an event key.
"""

from dotenv import load_dotenv
load_dotenv()

from threadsio_driver import (
    ThreadsIoClient,
    ThreadsIoService,
    User,
    Event,
    Page,
    InvalidKeyError,
)

client = ThreadsIoClient.from_env()
service = ThreadsIoService(client)

user = User("testUser1", {
    "name": "Ritchie Blackmore",
    "instrument": "Guitar",
    "brands": ["gibson", "squier", "fender"],
})

try:
    print(f"identify: {service.identify(user)}")
    print(f"track:    {service.track(user, Event('Connected', {'source': 'script'}))}")
    print(f"page:     {service.page(user, Page('Welcome Page', {'referrer': 'script'}))}")
    print(f"remove:   {service.remove(user)}")
except InvalidKeyError as e:
    print(f"✗ {e}")
finally:
    client.close()
