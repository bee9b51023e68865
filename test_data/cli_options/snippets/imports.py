import logging
from typing import TextIO
