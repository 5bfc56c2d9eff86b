"""测试公共 fixtures"""

import itertools
from datetime import datetime, timedelta, timezone

import pytest

from yorg.config import AppSettings, ImporterSettings, StoreSettings
from yorg.organization import EntityStore


class FakeClock:
    """可控时钟，每次调用前进一秒"""

    def __init__(self, start=None):
        self.current = start or datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        value = self.current
        self.current = value + timedelta(seconds=1)
        return value


def make_id_factory(prefix=""):
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store_settings():
    return StoreSettings()


@pytest.fixture
def store(store_settings, clock):
    """空存储，ID 依次为 "1", "2", ..."""
    return EntityStore(store_settings, clock=clock, id_factory=make_id_factory())


@pytest.fixture
def org_tree(store):
    """公司 -> 技术部、产品部；技术部 -> 前端组

    返回 (company, tech, product, frontend)
    """
    company = store.create_organization({"name": "示例公司", "type": "company"})
    tech = store.create_organization({
        "name": "技术部",
        "parentId": company.id,
        "description": "技术研发部门",
        "manager": "李部长",
    })
    product = store.create_organization({"name": "产品部", "parentId": company.id})
    frontend = store.create_organization({"name": "前端组", "type": "team", "parentId": tech.id})
    return company, tech, product, frontend


@pytest.fixture
def staffed_store(store, org_tree):
    """带人员的存储：张三、李四在技术部，王五在前端组"""
    _, tech, _, frontend = org_tree
    store.create_personnel({
        "name": "张三",
        "position": "软件工程师",
        "organizationId": tech.id,
        "email": "zhangsan@company.com",
        "phone": "13800138001",
        "joinDate": "2024-03-15",
        "salary": 15000,
        "age": 28,
        "gender": "male",
        "education": "本科",
    })
    store.create_personnel({
        "name": "李四",
        "position": "产品经理",
        "organizationId": tech.id,
        "email": "lisi@company.com",
        "joinDate": "2024-03-20",
        "salary": 22000,
        "age": 32,
        "gender": "female",
        "education": "硕士",
    })
    store.create_personnel({
        "name": "王五",
        "position": "前端工程师",
        "organizationId": frontend.id,
        "email": "wangwu@company.com",
        "joinDate": "2024-05-01",
        "status": "on-leave",
        "salary": 9000,
        "age": 24,
    })
    return store


@pytest.fixture
def importer_settings():
    return ImporterSettings(timeout_seconds=5, fallback_organization_id="1")


@pytest.fixture
def app_settings():
    return AppSettings(seed_data=False)
