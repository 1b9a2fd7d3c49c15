"""
E-Learning Package - DSP (Digital Solutions Platform)

Dieses Paket enthält den Kurs-Marktplatz: Kurse kaufen, Zahlungen
verifizieren, Studierende einschreiben und Kurse bewerten.

Features:
- Checkout mit Razorpay-kompatiblem Payment Gateway
- Signaturprüfung und atomare Einschreibung nach erfolgreicher Zahlung
- Benachrichtigungen per E-Mail nach Commit
- Bewertungen und Rezensionen mit Durchschnittsbewertung

Struktur:
- courses/: Kurse, Lernfortschritt und Bewertungen
- users/: Benutzerprofile mit eingeschriebenen Kursen
- payments/: Checkout- und Zahlungs-Endpunkte
- ratings/: Bewertungs-Endpunkte
- services/: Geschäftslogik (Enrollment, Payments, Ratings, Notifications)

Author: DSP Development Team
Created: 10.07.2025
Version: 1.0.0
"""
