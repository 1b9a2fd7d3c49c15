"""
E-Learning Services Package für DSP (Digital Solutions Platform)

Dieses Paket enthält alle Services für den Kurs-Marktplatz:
- Database Services (TransactionScope)
- Enrollment Services
- Payment Services (Checkout, Zahlungsverifikation)
- Notification Services (E-Mails)
- Rating Services

Struktur:
├── database/          # Transaktions-Handle
├── enrollment/        # Einschreibung in gekaufte Kurse
├── payments/          # Checkout und Zahlungsverifikation
├── notifications/     # E-Mail-Versand
└── ratings/           # Bewertungen

Author: DSP Development Team
Version: 1.0.0
"""
