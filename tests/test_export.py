import csv
import io


def test_export_csv(client):
    r = client.get("/api/export/committees.csv")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "committees.csv" in r.headers["content-disposition"]

    rows = list(csv.reader(io.StringIO(r.text)))
    assert rows[0][0] == "Type"
    committee_rows = [row for row in rows[1:] if row[0] == "Committee"]
    task_rows = [row for row in rows[1:] if row[0] == "Task"]
    assert [row[1] for row in committee_rows] == [str(i) for i in range(1, 11)]
    assert len(task_rows) == 35

    budget_tasks = [row for row in task_rows if row[1] == "3"]
    assert budget_tasks[0][:5] == ["Task", "3", "Collect department requests", "-", "Done"]


def test_report(client, admin_headers):
    client.put("/api/admin/committees/9/tasks", json={"tasks": [{"text": "Book hall", "done": True}]},
               headers=admin_headers)

    r = client.get("/api/report")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")

    md = r.text
    assert md.startswith("# SBS Report Progress Report")
    assert "- Average progress: **43%**" in md
    assert "### 9. Community Engagement Committee (Appendix 9)" in md
    assert "  - [x] Book hall" in md
    assert md.count("### ") == 10
