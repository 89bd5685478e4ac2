import pytest

from jobly.core.errors import BadRequestError, NotFoundError
from jobly.models import Company, Job
from jobly.schemas.schemas import CompanyNew
from jobly.utils.sql import SqlFragment


def _handles(companies):
    return [c["handle"] for c in companies]


# ---------------------------------------------------------------- create

def test_create(db):
    new_company = CompanyNew(
        handle="new",
        name="New",
        description="New Description",
        num_employees=1,
        logo_url="http://new.img",
    )
    company = Company.create(db, new_company)
    assert company == {
        "handle": "new",
        "name": "New",
        "description": "New Description",
        "numEmployees": 1,
        "logoUrl": "http://new.img",
    }
    assert Company.get(db, "new") == company


def test_create_with_only_required_fields(db):
    Company.create(db, CompanyNew(handle="bare", name="Bare"))
    assert Company.get(db, "bare") == {
        "handle": "bare",
        "name": "Bare",
        "description": None,
        "numEmployees": None,
        "logoUrl": None,
    }


def test_create_duplicate(db):
    with pytest.raises(BadRequestError, match="Duplicate company: c1"):
        Company.create(db, CompanyNew(handle="c1", name="Another"))


def test_create_duplicate_caught_by_unique_constraint(racing_db):
    with pytest.raises(BadRequestError, match="Duplicate company: c1"):
        Company.create(racing_db, CompanyNew(handle="c1", name="Another"))


# ---------------------------------------------------------------- findAll

def test_find_all_no_filter(db):
    companies = Company.find_all(db)
    assert companies == [
        {
            "handle": f"c{n}",
            "name": f"C{n}",
            "description": f"Desc{n}",
            "numEmployees": n,
            "logoUrl": f"http://c{n}.img",
        }
        for n in (1, 2, 3)
    ]


def test_find_all_min_employees(db):
    assert _handles(Company.find_all(db, {"minEmployees": 2})) == ["c2", "c3"]


def test_find_all_max_employees(db):
    assert _handles(Company.find_all(db, {"maxEmployees": 2})) == ["c1", "c2"]


def test_find_all_min_and_max(db):
    assert _handles(Company.find_all(db, {"minEmployees": 2, "maxEmployees": 2})) == ["c2"]


def test_find_all_name_like_is_case_insensitive(db):
    assert _handles(Company.find_all(db, {"nameLike": "c3"})) == ["c3"]


def test_find_all_no_match(db):
    assert Company.find_all(db, {"nameLike": "nope"}) == []


def test_find_all_min_greater_than_max_fails_before_query():
    # no session at all: the check must happen before any SQL
    with pytest.raises(BadRequestError, match="minEmployees must be less than maxEmployees"):
        Company.find_all(None, {"minEmployees": 3, "maxEmployees": 1})


def test_filter_by_query():
    assert Company._filter_by_query({"minEmployees": 1, "nameLike": "Net"}) == SqlFragment(
        "WHERE num_employees >= :p1 AND LOWER(name) LIKE :p2", [1, "%net%"]
    )


# ---------------------------------------------------------------- get

def test_get(db):
    assert Company.get(db, "c1")["name"] == "C1"


def test_get_not_found(db):
    with pytest.raises(NotFoundError, match="No company: nope"):
        Company.get(db, "nope")


# ---------------------------------------------------------------- update

def test_update(db):
    company = Company.update(db, "c1", {"name": "New", "numEmployees": 10, "logoUrl": "http://new.img"})
    assert company == {
        "handle": "c1",
        "name": "New",
        "description": "Desc1",
        "numEmployees": 10,
        "logoUrl": "http://new.img",
    }
    assert Company.get(db, "c1") == company


def test_update_leaves_other_fields(db):
    Company.update(db, "c2", {"description": "Changed"})
    company = Company.get(db, "c2")
    assert company["description"] == "Changed"
    assert company["name"] == "C2"
    assert company["numEmployees"] == 2
    assert company["logoUrl"] == "http://c2.img"


def test_update_null_fields(db):
    company = Company.update(db, "c1", {"numEmployees": None, "logoUrl": None})
    assert company["numEmployees"] is None
    assert company["logoUrl"] is None


def test_update_not_found(db):
    with pytest.raises(NotFoundError):
        Company.update(db, "nope", {"name": "test"})


def test_update_no_data(db):
    with pytest.raises(BadRequestError):
        Company.update(db, "c1", {})


# ---------------------------------------------------------------- remove

def test_remove(db):
    Company.remove(db, "c1")
    with pytest.raises(NotFoundError):
        Company.get(db, "c1")


def test_remove_cascades_to_jobs(db):
    Company.remove(db, "c1")
    assert all(job["companyHandle"] != "c1" for job in Job.find_all(db))


def test_remove_not_found(db):
    with pytest.raises(NotFoundError):
        Company.remove(db, "nope")
