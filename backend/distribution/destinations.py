from django.conf import settings

DEFAULT_DESTINATIONS = [
    "TK AL-MUHIBBIN",
    "SMKN 3 BANGKALAN",
    "SDN MLAJAH 1",
    "SDN MARTAJASAH",
    "SDN KRAMAT 1",
    "SDN KRAMAT 2",
    "SDN SEMBILANGAN",
    "SMPN 7 BANGKALAN",
    "SDIT NURUL RAHMAH",
    "TK ANBUNAYYA",
]

ADDRESSES = {
    "TK AL-MUHIBBIN": "Jalan Raya Martajasah No. 37, Kelurahan Martajasah, Kec. Bangkalan",
    "SMKN 3 BANGKALAN": "Jl. Mertajasah No.70, Blandungan, Mertajasah, Kec. Bangkalan",
    "SDN MLAJAH 1": "Jl. Sidingkap, Mlajah, Kec. Bangkalan",
    "SDN MARTAJASAH": "Jl. Kemuning, Mertajasah, Kec. Bangkalan",
    "SDN KRAMAT 1": "Pelinggian Timur, Kramat, Kec. Bangkalan",
    "SDN KRAMAT 2": "Dusun Morkolak Timur, Kramat, Kec. Bangkalan",
    "SDN SEMBILANGAN": "Jl. Sembilangan No.03, Sembilangan, Kec. Bangkalan",
    "SMPN 7 BANGKALAN": "Jl. Raya Markolak Timur, Kramat, Kec. Bangkalan",
    "SDIT NURUL RAHMAH": "Jl. Teuku Umar II, Kemayoran, Kec. Bangkalan",
    "TK ANBUNAYYA": "Perum Griya Abadi Blok BB 01, Mlajah, Kec. Bangkalan",
}


def destinations() -> list[str]:
    return list(settings.DISTRIBUTION_DESTINATIONS or DEFAULT_DESTINATIONS)


def address_for(destination: str) -> str:
    return ADDRESSES.get(destination, "-")
