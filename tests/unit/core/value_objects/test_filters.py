"""
Tests pour les filtres de liste, la pagination et les metadonnees.
"""

import pytest

from cinestore.core.entities.movie import MOVIE_SORT_SAFELIST
from cinestore.core.validator import Validator
from cinestore.core.value_objects.filters import (
    Filters,
    Metadata,
    calculate_metadata,
    read_csv,
    read_int,
    read_string,
    validate_filters,
)


def _filters(**kwargs) -> Filters:
    kwargs.setdefault("sort_safelist", MOVIE_SORT_SAFELIST)
    return Filters(**kwargs)


class TestFilters:
    """Tests pour Filters."""

    def test_sort_ascendant(self):
        f = _filters(sort="year")
        assert f.sort_column() == "year"
        assert f.sort_direction() == "ASC"

    def test_sort_descendant(self):
        f = _filters(sort="-title")
        assert f.sort_column() == "title"
        assert f.sort_direction() == "DESC"

    def test_sort_hors_liste_blanche_leve(self):
        """Une cle hors liste blanche n'atteint jamais la requete."""
        f = _filters(sort="password; DROP TABLE movies")
        with pytest.raises(ValueError):
            f.sort_column()

    def test_limit_offset(self):
        f = _filters(page=3, page_size=10)
        assert f.limit() == 10
        assert f.offset() == 20


class TestValidateFilters:
    """Tests pour validate_filters."""

    def test_filtres_par_defaut_valides(self):
        v = Validator()
        validate_filters(v, _filters())
        assert v.valid()

    @pytest.mark.parametrize(
        "kwargs,field",
        [
            ({"page": 0}, "page"),
            ({"page": 10_000_001}, "page"),
            ({"page_size": 0}, "page_size"),
            ({"page_size": 101}, "page_size"),
            ({"sort": "name"}, "sort"),
        ],
    )
    def test_filtres_invalides(self, kwargs, field):
        v = Validator()
        validate_filters(v, _filters(**kwargs))
        assert field in v.failure().as_dict()

    def test_bornes_incluses(self):
        v = Validator()
        validate_filters(v, _filters(page=10_000_000, page_size=100))
        assert v.valid()


class TestCalculateMetadata:
    """Tests pour calculate_metadata."""

    def test_total_zero_donne_metadonnees_vides(self):
        assert calculate_metadata(0, 1, 20) == Metadata()
        assert calculate_metadata(0, 5, 20) == Metadata(0, 0, 0, 0, 0)

    def test_division_par_exces(self):
        assert calculate_metadata(25, 2, 10) == Metadata(
            current_page=2, page_size=10, first_page=1, last_page=3, total_records=25
        )

    def test_total_multiple_exact(self):
        """20 lignes par pages de 10 : 2 pages, pas 3."""
        assert calculate_metadata(20, 1, 10).last_page == 2

    def test_une_seule_ligne(self):
        assert calculate_metadata(1, 1, 20).last_page == 1


class TestQueryStringReaders:
    """Tests des lecteurs de query string."""

    def test_read_string(self):
        assert read_string({"title": "godfather"}, "title", "") == "godfather"
        assert read_string({}, "title", "") == ""
        assert read_string({"sort": ""}, "sort", "id") == "id"

    def test_read_csv(self):
        assert read_csv({"genres": "crime,drama"}, "genres", []) == ["crime", "drama"]
        assert read_csv({"genres": " crime, ,drama "}, "genres", []) == ["crime", "drama"]
        assert read_csv({}, "genres", []) == []

    def test_read_int(self):
        v = Validator()
        assert read_int({"page": "3"}, "page", 1, v) == 3
        assert read_int({}, "page", 1, v) == 1
        assert v.valid()

    def test_read_int_invalide_ajoute_une_erreur(self):
        v = Validator()
        assert read_int({"page": "abc"}, "page", 1, v) == 1
        assert v.errors == [("page", "must be an integer value")]
