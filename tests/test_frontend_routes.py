"""
End-to-end tests for the Jinja2 dashboard page served by api/routes/frontend.py:
    GET /    — filter dropdowns, pie chart, per-department time series
"""
import sys
from pathlib import Path

import pytest
from azure.core.exceptions import ServiceRequestError
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from api.app import create_app


@pytest.fixture()
def app_client(fake_container_cls, fallback_rows):
    return TestClient(create_app(container=fake_container_cls(rows=fallback_rows)))


class TestIndexPage:
    def test_renders(self, app_client):
        resp = app_client.get("/")
        assert resp.status_code == 200
        assert "text/html" in resp.headers["content-type"]
        assert "Government Spending Dashboard" in resp.text

    def test_rendered_after_load(self, app_client):
        html = app_client.get("/").text
        assert "Loading" not in html
        assert 'id="pie-chart"' in html

    def test_dropdown_options(self, app_client):
        html = app_client.get("/").text
        assert '<option value="2022"' in html
        assert '<option value="2023"' in html
        assert '<option value="Transportation"' in html
        assert html.count('<option value="">All</option>') == 2

    def test_selected_options(self, app_client):
        html = app_client.get("/", params={"year": "2023", "department": "Defense"}).text
        assert '<option value="2023" selected>' in html
        assert '<option value="Defense" selected>' in html

    def test_pie_total_for_year(self, app_client):
        html = app_client.get("/", params={"year": "2023"}).text
        assert "Total: 1,260" in html

    def test_chart_data_embedded(self, app_client):
        html = app_client.get("/", params={"year": "2023"}).text
        assert 'const pieLabels = ["Defense", "Education", "Healthcare", "Transportation"]' in html
        assert '"labels": ["2022", "2023"]' in html

    def test_one_series_per_department(self, app_client):
        html = app_client.get("/").text
        for i in range(4):
            assert f'id="series-{i}"' in html
        assert 'id="series-4"' not in html

    def test_no_data_message(self, app_client):
        html = app_client.get("/", params={"year": "1999"}).text
        assert "No data available for the selected filters." in html
        assert 'id="pie-chart"' not in html

    def test_fallback_notice(self, fake_container_cls):
        container = fake_container_cls(error=ServiceRequestError("down"))
        client = TestClient(create_app(container=container))
        html = client.get("/").text
        assert "built-in sample data" in html
        assert '<option value="Defense"' in html

    def test_no_fallback_notice_on_success(self, app_client):
        assert "built-in sample data" not in app_client.get("/").text

    def test_department_names_escaped(self, fake_container_cls):
        rows = [{"department": "<b>R&D</b>", "year": 2022, "amount": 1}]
        client = TestClient(create_app(container=fake_container_cls(rows=rows)))
        html = client.get("/").text
        assert "<b>R&D</b>" not in html
        assert "&lt;b&gt;R&amp;D&lt;/b&gt;" in html
