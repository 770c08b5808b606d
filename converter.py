"""
TourGpX — Tour to GPX Converter
The conversion pipeline: download, extract, parse, convert, write.
"""

from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Optional

from config import Configuration, Deadline, default_config
from errors import TourError
from extractor import extract_json_from_html
from fetcher import PageFetcher
from formats import write_gpx
from models import GpxDocument
from tour import parse_tour_json, tour_to_gpx

logger = logging.getLogger(__name__)


@contextmanager
def _stage(name: str, deadline: Deadline):
    """Tag any TourError raised inside with the stage that failed."""
    try:
        deadline.check()
        yield
    except TourError as e:
        if e.stage is None:
            e.stage = name
        raise


class Converter:
    """Runs one tour URL through the pipeline.

    ``fetcher_factory`` builds the page fetcher for a conversion from the
    configuration and that conversion's deadline; tests use it to swap the
    network for a fake opener.
    """

    def __init__(self, config: Optional[Configuration] = None, fetcher_factory=None):
        self.config = config or default_config()
        self.fetcher_factory = fetcher_factory or PageFetcher

    def convert(self, url: str, output_path: str) -> GpxDocument:
        deadline = Deadline(self.config.deadline)

        with _stage("download tour data", deadline):
            logger.info("Downloading tour data from %s", url)
            fetcher = self.fetcher_factory(self.config, deadline)
            page = fetcher.fetch(url)

        with _stage("extract JSON data", deadline):
            logger.info("Extracting JSON data from HTML")
            payload = extract_json_from_html(page)

        with _stage("parse JSON data", deadline):
            tour = parse_tour_json(payload)

        with _stage("convert to GPX", deadline):
            document = tour_to_gpx(tour, creator=self.config.user_agent)
            logger.debug("Tour %r has %d points", tour.name, len(tour.items))

        with _stage("write GPX file", deadline):
            write_gpx(output_path, document)

        logger.info("Successfully created GPX file: %s", output_path)
        return document
