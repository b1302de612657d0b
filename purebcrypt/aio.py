"""purebcrypt.aio - asyncio wrappers

bcrypt is cpu bound and never yields, so these just push the blocking
calls from :mod:`purebcrypt` onto a worker thread via :func:`asyncio.to_thread`.
a running hash can't be cancelled; cancelling the awaiting task only
abandons the result.
"""
#=========================================================
#imports
#=========================================================
#core
import asyncio
import logging; log = logging.getLogger(__name__)
#pkg
from purebcrypt import generate_salt, hash_password, verify_password
#local
__all__ = [
    "generate_salt_async",
    "hash_password_async",
    "verify_password_async",
]

#=========================================================
#wrappers
#=========================================================
async def generate_salt_async(rounds=None, version=None, config=None):
    "async version of :func:`purebcrypt.generate_salt`"
    return await asyncio.to_thread(generate_salt, rounds, version, config)

def _hash_new(password, config):
    salt = generate_salt(config=config)
    return hash_password(password, salt, config=config)

async def hash_password_async(password, config=None):
    """hash password with a freshly generated salt, on a worker thread.

    :param config: optional :class:`~purebcrypt.config.BcryptConfig`.
    :returns: 60 char hash string.
    """
    return await asyncio.to_thread(_hash_new, password, config)

async def verify_password_async(password, hash, config=None):
    "async version of :func:`purebcrypt.verify_password`"
    return await asyncio.to_thread(verify_password, password, hash, config)

#=========================================================
#eof
#=========================================================
