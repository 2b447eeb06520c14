# Copyright 2024, m3shware
#
# Permission is hereby granted, free of charge, to any person obtaining a
# copy of this software and associated documentation files (the "Software"),
# to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense,
# and/or sell copies of the Software, and to permit persons to whom the
# Software is furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
# FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS
# IN THE SOFTWARE.

""" Logging setup.

Modules of this package log to child loggers of the ``halfmesh`` logger
and never configure handlers themselves. Applications call
:func:`setup_logging` once.
"""

import logging
import os

FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def _debug_from_env():
    return os.environ.get('HALFMESH_DEBUG', '').strip() not in ('', '0')


def setup_logging(log_file=None, *, quiet=False, debug=None):
    """ Configure and return the shared ``halfmesh`` logger.

    Parameters
    ----------
    log_file : str, optional
        Path of a log file. The file is truncated. By default, no file is
        written.
    quiet : bool, optional
        Suppress console output.
    debug : bool, optional
        Log at ``DEBUG`` instead of ``INFO`` level. Defaults to the value
        of the ``HALFMESH_DEBUG`` environment variable.

    Returns
    -------
    logging.Logger
    """
    if debug is None:
        debug = _debug_from_env()

    logger = logging.getLogger('halfmesh')

    # Records still reach the root logger, so pytest's caplog sees them
    # even if console output is suppressed.
    logger.propagate = True

    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(FORMAT)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
