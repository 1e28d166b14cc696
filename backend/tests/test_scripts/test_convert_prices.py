"""
Tests for the USD -> INR price conversion script
"""
import sys
from pathlib import Path

# Scripts are not part of the installed package
SCRIPTS_DIR = Path(__file__).resolve().parents[2] / 'scripts'
sys.path.insert(0, str(SCRIPTS_DIR))

from convert_prices import USD_TO_INR, plan_conversions


class TestPlanConversions:

    def test_splits_mapped_and_unmapped_prices(self):
        # Arrange
        products = [
            {'id': 1, 'name': 'Timber Lounge Chair', 'price': '1000'},
            {'id': 2, 'name': 'Odd Stool', 'price': '999'},
            {'id': 3, 'name': 'Brass Floor Lamp', 'price': ' 550 '},
        ]

        # Act
        updates, unmapped = plan_conversions(products)

        # Assert
        assert updates == [
            (1, 'Timber Lounge Chair', '1000', '83000'),
            (3, 'Brass Floor Lamp', ' 550 ', '45650'),
        ]
        assert [p['id'] for p in unmapped] == [2]

    def test_already_converted_prices_are_left_alone(self):
        updates, unmapped = plan_conversions([{'id': 1, 'name': 'Chair', 'price': '83000'}])

        assert updates == []
        assert len(unmapped) == 1

    def test_mapping_uses_83_rupees_per_dollar(self):
        for usd, inr in USD_TO_INR.items():
            assert int(inr) == int(usd) * 83
