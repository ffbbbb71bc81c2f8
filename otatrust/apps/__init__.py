#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2020-2022,2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""OTATrust applications package.

This package contains command-line applications delivered with OTATrust for
inspecting update signatures and provisioning credentials.
"""
