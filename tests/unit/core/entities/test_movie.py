"""
Tests pour l'entite Movie et ses regles de validation.
"""

from datetime import datetime

import pytest

from cinestore.core.entities.movie import Movie, format_runtime, parse_runtime, validate_movie
from cinestore.core.validator import Validator


def _movie(**kwargs) -> Movie:
    values = {"title": "Inception", "year": 2010, "runtime": 148, "genres": ["sci-fi", "thriller"]}
    values.update(kwargs)
    return Movie(**values)


def _errors(movie: Movie) -> dict[str, str]:
    v = Validator()
    validate_movie(v, movie)
    return v.failure().as_dict()


class TestValidateMovie:
    """Tests pour validate_movie."""

    def test_film_valide(self):
        v = Validator()
        validate_movie(v, _movie())
        assert v.valid()

    def test_titre_vide(self):
        assert _errors(_movie(title="")) == {"title": "must be provided"}

    def test_titre_trop_long(self):
        assert "title" in _errors(_movie(title="x" * 500))

    def test_annee_trop_ancienne(self):
        assert _errors(_movie(year=1700)) == {"year": "must be greater than 1879"}

    def test_annee_future(self):
        next_year = datetime.now().year + 1
        assert _errors(_movie(year=next_year)) == {"year": "must not be in the future"}

    def test_annee_courante_acceptee(self):
        assert _errors(_movie(year=datetime.now().year)) == {}

    def test_duree_nulle(self):
        assert _errors(_movie(runtime=0)) == {"runtime": "must be provided"}

    def test_duree_negative(self):
        assert _errors(_movie(runtime=-5)) == {"runtime": "must be a positive integer"}

    def test_six_genres(self):
        genres = ["a", "b", "c", "d", "e", "f"]
        assert _errors(_movie(genres=genres)) == {
            "genres": "must not contain more than 5 genres"
        }

    def test_genres_en_double(self):
        assert _errors(_movie(genres=["drama", "drama"])) == {
            "genres": "must not contain duplicate values"
        }

    def test_aucun_genre(self):
        assert _errors(_movie(genres=[])) == {"genres": "must contain at least 1 genre"}

    def test_film_vide_remonte_toutes_les_erreurs(self):
        assert set(_errors(Movie())) == {"title", "year", "runtime", "genres"}


class TestRuntime:
    """Tests du format de duree "<n> mins"."""

    def test_format_runtime(self):
        assert format_runtime(102) == "102 mins"
        assert format_runtime(0) is None

    @pytest.mark.parametrize("value,expected", [(102, 102), ("102 mins", 102), (" 90 mins ", 90)])
    def test_parse_runtime(self, value, expected):
        assert parse_runtime(value) == expected

    @pytest.mark.parametrize("value", ["102", "102 minutes", "mins", True, 1.5, None])
    def test_parse_runtime_format_invalide(self, value):
        with pytest.raises(ValueError):
            parse_runtime(value)
