# tests/test_admin_reports.py
"""
Status changes with audit trail, admin listing and dashboard
"""
import pytest
from sqlalchemy.exc import IntegrityError

from denonce import models
from denonce.crud import report_crud


class TestChangeStatus:

    def test_change_status_records_history(self, client, db, admin_headers, signalement, statut_examen):
        resp = client.patch(
            f"/api/admin/signalements/{signalement['id']}/statut",
            json={"nouveau_statut_id": statut_examen.id, "commentaire": "Pris en charge"},
            headers=admin_headers,
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["message"] == "Statut mis à jour avec succès"
        assert data["signalement"]["statut"]["id"] == statut_examen.id
        assert data["updated_by"] == {"nom": "Modérateur Principal", "email": "moderateur@denonce.tg"}

        history = db.query(models.HistoriqueStatut).filter(
            models.HistoriqueStatut.signalement_id == signalement["id"]
        ).all()
        assert len(history) == 1
        assert history[0].ancien_statut_id == signalement["statut_id"]
        assert history[0].nouveau_statut_id == statut_examen.id
        assert history[0].commentaire == "Pris en charge"
        assert history[0].administrateur.email == "moderateur@denonce.tg"

    def test_history_visible_by_tracking_code(self, client, admin_headers, signalement, statut_examen):
        client.patch(
            f"/api/admin/signalements/{signalement['id']}/statut",
            json={"nouveau_statut_id": statut_examen.id},
            headers=admin_headers,
        )

        data = client.get(f"/api/declarations/suivi/{signalement['code_suivi']}").json()
        assert data["statut"]["nom"] == "En cours d'examen"
        assert len(data["historique_statuts"]) == 1
        entry = data["historique_statuts"][0]
        assert entry["ancien_statut"]["nom"] == "Non traité"
        assert entry["nouveau_statut"]["nom"] == "En cours d'examen"
        assert entry["administrateur"]["email"] == "moderateur@denonce.tg"
        assert entry["commentaire"] is None

    def test_any_status_can_follow_any_other(self, client, db, admin_headers, signalement):
        resolu = db.query(models.Statut).filter(models.Statut.nom == "Résolu").one()
        non_traite = db.query(models.Statut).filter(models.Statut.nom == "Non traité").one()

        for statut in (resolu, non_traite):
            resp = client.patch(
                f"/api/admin/signalements/{signalement['id']}/statut",
                json={"nouveau_statut_id": statut.id},
                headers=admin_headers,
            )
            assert resp.status_code == 200

        assert db.query(models.HistoriqueStatut).count() == 2

    def test_unknown_status(self, client, admin_headers, signalement):
        resp = client.patch(
            f"/api/admin/signalements/{signalement['id']}/statut",
            json={"nouveau_statut_id": "inexistant"},
            headers=admin_headers,
        )
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Statut invalide."

    def test_unknown_report(self, client, admin_headers, statut_examen):
        resp = client.patch(
            "/api/admin/signalements/inexistant/statut",
            json={"nouveau_statut_id": statut_examen.id},
            headers=admin_headers,
        )
        assert resp.status_code == 404

    def test_requires_token(self, client, signalement, statut_examen):
        resp = client.patch(
            f"/api/admin/signalements/{signalement['id']}/statut",
            json={"nouveau_statut_id": statut_examen.id},
        )
        assert resp.status_code == 401

    def test_failed_history_write_leaves_report_untouched(self, db, signalement, statut_examen):
        # an actor that does not exist makes the history insert violate its foreign key
        ghost = models.Administrateur(id="fantome", email="x@x.tg", nom="x", mot_de_passe="x")

        with pytest.raises(IntegrityError):
            report_crud.change_status(db, signalement["id"], statut_examen.id, ghost)

        db.expire_all()
        report = db.query(models.Signalement).filter(models.Signalement.id == signalement["id"]).one()
        assert report.statut_id == signalement["statut_id"]
        assert db.query(models.HistoriqueStatut).count() == 0

    def test_failed_history_write_over_http(
        self, failsafe_client, db, admin_headers, signalement, statut_examen, monkeypatch
    ):
        history_cls = models.HistoriqueStatut

        def orphan_history(**kwargs):
            kwargs["admin_id"] = "fantome"
            return history_cls(**kwargs)

        monkeypatch.setattr(models, "HistoriqueStatut", orphan_history)

        resp = failsafe_client.patch(
            f"/api/admin/signalements/{signalement['id']}/statut",
            json={"nouveau_statut_id": statut_examen.id},
            headers=admin_headers,
        )
        assert resp.status_code == 500
        assert resp.json() == {"detail": "Erreur interne du serveur."}

        monkeypatch.undo()
        db.expire_all()
        report = db.query(models.Signalement).filter(models.Signalement.id == signalement["id"]).one()
        assert report.statut_id == signalement["statut_id"]
        assert db.query(models.HistoriqueStatut).count() == 0

        tracked = failsafe_client.get(f"/api/declarations/suivi/{signalement['code_suivi']}").json()
        assert tracked["statut"]["nom"] == "Non traité"
        assert tracked["historique_statuts"] == []


class TestAdminListing:

    def _create(self, client, categorie_id, titre):
        return client.post("/api/declarations", json={
            "titre": titre, "description": "d", "categorie_id": categorie_id,
        }).json()

    def test_pagination(self, client, admin_headers, categorie):
        for i in range(5):
            self._create(client, categorie.id, f"S{i}")

        resp = client.get("/api/admin/signalements?page=2&limit=2", headers=admin_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert len(data["signalements"]) == 2
        assert data["pagination"] == {"page": 2, "limit": 2, "total": 5, "pages": 3}

    def test_filters(self, client, db, admin_headers, categorie, statut_examen):
        fraude = db.query(models.Categorie).filter(models.Categorie.nom == "Fraude").one()
        first = self._create(client, categorie.id, "A")
        self._create(client, fraude.id, "B")
        client.patch(
            f"/api/admin/signalements/{first['id']}/statut",
            json={"nouveau_statut_id": statut_examen.id},
            headers=admin_headers,
        )

        by_cat = client.get(f"/api/admin/signalements?categorie={fraude.id}", headers=admin_headers).json()
        assert [s["titre"] for s in by_cat["signalements"]] == ["B"]

        by_statut = client.get(f"/api/admin/signalements?statut={statut_examen.id}", headers=admin_headers).json()
        assert [s["titre"] for s in by_statut["signalements"]] == ["A"]
        assert by_statut["pagination"]["total"] == 1

    def test_invalid_page(self, client, admin_headers):
        resp = client.get("/api/admin/signalements?page=0", headers=admin_headers)
        assert resp.status_code == 400

    def test_detail(self, client, admin_headers, signalement):
        client.post(f"/api/declarations/{signalement['id']}/commentaires", json={"message": "info"})

        resp = client.get(f"/api/admin/signalements/{signalement['id']}", headers=admin_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["id"] == signalement["id"]
        assert data["categorie"]["nom"] == "Corruption"
        assert data["statut"]["nom"] == "Non traité"
        assert len(data["commentaires"]) == 1

    def test_detail_unknown(self, client, admin_headers):
        resp = client.get("/api/admin/signalements/inexistant", headers=admin_headers)
        assert resp.status_code == 404


class TestDashboard:

    def test_dashboard_counts(self, client, admin_headers, signalement, categorie):
        resp = client.get("/api/admin/dashboard", headers=admin_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["total_signalements"] == 1
        assert data["signalements_by_statut"][0]["nom"] == "Non traité"
        assert data["signalements_by_statut"][0]["count"] == 1
        assert data["signalements_by_categorie"] == [
            {"categorie_id": categorie.id, "nom": "Corruption", "couleur": "#dc2626", "count": 1}
        ]
        assert [s["id"] for s in data["recent_signalements"]] == [signalement["id"]]
        assert data["admin_info"] == {"nom": "Modérateur Principal", "role": "admin"}

    def test_recent_is_capped_at_ten(self, client, admin_headers, categorie):
        for i in range(12):
            client.post("/api/declarations", json={"titre": f"S{i}", "description": "d", "categorie_id": categorie.id})

        data = client.get("/api/admin/dashboard", headers=admin_headers).json()
        assert data["total_signalements"] == 12
        assert len(data["recent_signalements"]) == 10
