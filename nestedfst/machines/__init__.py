# nestedfst/machines/__init__.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Reference machines built with the transducer engine."""
