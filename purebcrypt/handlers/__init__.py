"""purebcrypt.handlers -- password hash handlers"""
