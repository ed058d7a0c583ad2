# app/data/addresses.py
"""Bundled Chico rental address list, one "<street>, <city>, <ST> <zip>" per line."""

ADDRESSES_RAW = """\
275 E Shasta Ave, Chico, CA 95973
390 Rio Lindo Ave, Chico, CA 95926
101 Risa Way, Chico, CA 95973
821 W East Ave, Chico, CA 95926
811 W East Ave, Chico, CA 95926
400 Mission Ranch Blvd, Chico, CA 95926
123 Henshaw Ave, Chico, CA 95973
711 W East Ave, Chico, CA 95926
220 W 1st Ave, Chico, CA 95926
1256 Warner St Unit C, Chico, CA 95926
1501 N Cherry St, Chico, CA 95926
1565 N Cherry St, Chico, CA 95926
920 W 4th Ave, Chico, CA 95926
1221 N Cedar St, Chico, CA 95926
820 W 4th Ave, Chico, CA 95926
1975 Bruce Rd, Chico, CA 95928
2602 E 20th St, Chico, CA 95928
2060 Amanda Way, Chico, CA 95928
1450 Springfield Dr Unit 162, Chico, CA 95928
1550 Springfield Dr, Chico, CA 95928
1894 Notre Dame Blvd, Chico, CA 95928
100 Sterling Oaks Dr, Chico, CA 95928
447 W 7th St, Chico, CA 95928
161 E 5th St, Chico, CA 95928
1197 E 8th St, Chico, CA 95928
1169 E 8th St, Chico, CA 95928
621 Pomona Ave, Chico, CA 95928
946 Cedar St, Chico, CA 95928
940 Walnut St, Chico, CA 95928
1145 W 9th St, Chico, CA 95928
1400 W 3rd St, Chico, CA 95928
1253 West 5th St, Chico, CA 95928
581 Pomona Ave, Chico, CA 95928
2754 Native Oak Dr, Chico, CA 95928
476 E Lassen Ave, Chico, CA 95973
1080 E Lassen Ave, Chico, CA 95973
864 East Ave #1220, Chico, CA 95926
4070 Nord Hwy, Chico, CA 95973
47 Cobblestone Dr, Chico, CA 95928
1661 Forest Ave, Chico, CA 95928
1200 Nord Ave, Chico, CA 95926
421 Oak St, Chico, CA 95928
2265 Maclovia Ave, Chico, CA 95928
"""
