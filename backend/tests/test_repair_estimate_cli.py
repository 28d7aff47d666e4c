import io
import json
import os
import random
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import MagicMock

from app.core.di.service_locator import ServiceLocator
from app.data.adapters.location_directory import LocationDirectory
from app.domain.entities.places_entity import STATUS_REQUEST_FAILED, NearbySearchResponse
from app.domain.repositories.places_repository import PlacesRepository
from app.domain.usecases.estimate_repair_cost_usecase import EstimateRepairCostUseCase
from app.domain.usecases.rank_repair_shops_usecase import RankRepairShopsUseCase
from app.domain.usecases.resolve_location_usecase import ResolveLocationUseCase
from scripts.repair_estimate_cli import main


class TestRepairEstimateCli(unittest.TestCase):

    def setUp(self):
        ServiceLocator.reset()
        self.mock_repo = MagicMock(spec=PlacesRepository)
        ServiceLocator._estimate_usecase = EstimateRepairCostUseCase()
        ServiceLocator._resolve_location_usecase = ResolveLocationUseCase(
            directory=LocationDirectory(), repository=self.mock_repo,
        )
        ServiceLocator._rank_shops_usecase = RankRepairShopsUseCase(repository=self.mock_repo, rng=random.Random(3))

    def tearDown(self):
        ServiceLocator.reset()

    def _run(self, argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(argv)
        return code, out.getvalue()

    def test_geocode_json(self):
        code, output = self._run(["--json", "geocode", "Chicago"])
        self.assertEqual(code, 0)
        body = json.loads(output)
        self.assertEqual(body["formatted_address"], "Chicago, IL")
        self.assertEqual(body["point"], {"lat": 41.8781, "lng": -87.6298})
        self.mock_repo.text_search.assert_not_called()

    def test_estimate_from_file(self):
        payload = {"parts": [{"part": "front_bumper", "severity": "moderate"}], "confidence": 0.9}
        with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False, encoding="utf-8") as fh:
            json.dump(payload, fh)
        self.addCleanup(os.remove, fh.name)

        code, output = self._run(["estimate", fh.name])
        self.assertEqual(code, 0)
        self.assertIn("$595 - $805", output)

    def test_estimate_missing_file(self):
        code, _ = self._run(["estimate", os.path.join(tempfile.gettempdir(), "no-such-assessment.json")])
        self.assertEqual(code, 1)

    def test_shops_falls_back_to_demo(self):
        self.mock_repo.search_nearby.return_value = NearbySearchResponse(status=STATUS_REQUEST_FAILED)
        code, output = self._run(["shops", "94101"])
        self.assertEqual(code, 0)
        self.assertEqual(output.count("(demo)"), 5)
