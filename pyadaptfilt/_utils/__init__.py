# pyadaptfilt/_utils/__init__.py
