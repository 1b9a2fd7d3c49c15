"""
E-Learning Users Package - DSP (Digital Solutions Platform)

Dieses Paket enthält die Benutzerprofile des Kurs-Marktplatzes.

Features:
- Profil mit eingeschriebenen Kursen und Lernfortschritt
- Automatische Profilerstellung durch Django-Signale
- Serialisierung des eingeschriebenen Benutzers nach der Zahlung

Struktur:
- models.py: Benutzerprofile und Signal-Handler
- serializers.py: API-Serialisierung für Benutzerdaten

Author: DSP Development Team
Created: 10.07.2025
Version: 1.0.0
"""
