# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures."""

import pytest

from genro_fluenthtml import HtmlIdRegistrar


@pytest.fixture(autouse=True)
def fresh_global_registrar():
    """Give every test its own process-wide id registrar."""
    HtmlIdRegistrar.set_global_instance(None)
    yield
    HtmlIdRegistrar.set_global_instance(None)
