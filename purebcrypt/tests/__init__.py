"""purebcrypt tests"""
